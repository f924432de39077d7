"""FastAPI dependency factories for service injection."""

from __future__ import annotations

from fastapi import Request

from alert_relay.config import AppConfig
from alert_relay.modules.message.service import MessagePipeline
from alert_relay.modules.relay.service import WebhookRelay
from alert_relay.services.route_table import RouteTable
from alert_relay.settings import AppSettings


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_route_table(request: Request) -> RouteTable:
    return request.app.state.route_table


def get_pipeline(request: Request) -> MessagePipeline:
    return request.app.state.pipeline


def get_relay(request: Request) -> WebhookRelay:
    return request.app.state.relay
