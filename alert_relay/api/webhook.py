"""Inbound alert webhook and dry-run preview routes."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from alert_relay.api.deps import get_pipeline, get_relay, get_route_table
from alert_relay.api.errors import service_errors
from alert_relay.core.errors import RouteNotFoundError, ValidationError
from alert_relay.core.contracts import RouteLookup
from alert_relay.core.types import PipelineResult
from alert_relay.modules.message.service import MessagePipeline
from alert_relay.modules.relay.service import WebhookRelay
from alert_relay.schemas import PreviewCode, PreviewResponse, WebhookResponse
from alert_relay.services.route_table import RouteTable

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["webhook"])


@router.post("/webhook", response_model=WebhookResponse)
async def webhook(
    request: Request,
    key: Optional[str] = Query(None),
    route_table: RouteTable = Depends(get_route_table),
    pipeline: MessagePipeline = Depends(get_pipeline),
    relay: WebhookRelay = Depends(get_relay),
) -> WebhookResponse:
    with service_errors():
        return await _relay_alert(request, key, route_table, pipeline, relay)


@router.post("/webhook/{key}", response_model=WebhookResponse)
async def webhook_by_path(
    key: str,
    request: Request,
    route_table: RouteTable = Depends(get_route_table),
    pipeline: MessagePipeline = Depends(get_pipeline),
    relay: WebhookRelay = Depends(get_relay),
) -> WebhookResponse:
    with service_errors():
        return await _relay_alert(request, key, route_table, pipeline, relay)


@router.post("/preview", response_model=PreviewResponse)
async def preview(
    request: Request,
    beautify: Optional[bool] = Query(None),
    pipeline: MessagePipeline = Depends(get_pipeline),
) -> PreviewResponse:
    raw = await request.body()
    with service_errors():
        result = await pipeline.process_payload(
            raw,
            request.headers.get("content-type"),
            beautify=beautify,
        )
    return PreviewResponse(
        content=result.content,
        codes=_preview_codes(result),
        names=result.names,
        already_formatted=result.already_formatted,
        beautified=result.beautified,
    )


def _preview_codes(result: PipelineResult) -> List[PreviewCode]:
    markets: Dict[str, str] = {}
    for match in result.matches:
        markets.setdefault(match.code, match.market.value)
    return [
        PreviewCode(code=code, market=market, name=result.names.get(code))
        for code, market in markets.items()
    ]


async def _relay_alert(
    request: Request,
    key: Optional[str],
    route_table: RouteLookup,
    pipeline: MessagePipeline,
    relay: WebhookRelay,
) -> WebhookResponse:
    if not key:
        raise ValidationError("Missing 'key' parameter.")
    route = route_table.route_for(key)
    if route is None:
        raise RouteNotFoundError(f"Proxy key '{key}' not found or misconfigured.")

    # Read the body ourselves so non-ASCII bytes reach the normalizer untouched.
    raw = await request.body()
    result = await pipeline.process_payload(raw, request.headers.get("content-type"))
    logger.debug("Relaying alert for key %s as %s", key, route.type)
    await relay.deliver(route, result.content)
    return WebhookResponse(success=True, message=f"Alert processed for key '{key}'.")
