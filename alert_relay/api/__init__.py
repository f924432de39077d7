"""Alert relay API package: FastAPI application factory."""

from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.responses import ORJSONResponse

from alert_relay.api import health, webhook
from alert_relay.api.errors import register_error_handlers
from alert_relay.config import AppConfig
from alert_relay.modules.message.service import MessagePipeline
from alert_relay.modules.name_lookup.service import NameLookupService
from alert_relay.modules.relay.service import WebhookRelay
from alert_relay.services.config_store import ConfigStore
from alert_relay.services.route_table import RouteTable
from alert_relay.settings import AppSettings


def create_app(
    settings: Optional[AppSettings] = None,
    config: Optional[AppConfig] = None,
) -> FastAPI:
    settings = settings or AppSettings()
    if config is None:
        config = ConfigStore(config_path=settings.config_file).load()
    # Routing is fixed for the life of the process.
    route_table = RouteTable.from_sources(
        file_routes=config.routes,
        env_value=settings.webhook_config,
    )

    app = FastAPI(
        title="Alert Relay",
        version="0.3.0",
        default_response_class=ORJSONResponse,
    )

    # ---------- state --------------------------------------------------------
    app.state.settings = settings
    app.state.config = config
    app.state.route_table = route_table
    app.state.pipeline = MessagePipeline(config=config, lookup=NameLookupService(config))
    app.state.relay = WebhookRelay.from_config(config)

    # ---------- errors / routers ---------------------------------------------
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(webhook.router)

    return app
