from __future__ import annotations

import logging
from typing import Any, Dict

import httpx

from alert_relay.config import AppConfig
from alert_relay.core.errors import RelayDeliveryError
from alert_relay.core.types import RelayResult, Route
from alert_relay.infra.http.client import HttpClient

logger = logging.getLogger(__name__)

WECOM_TYPE = "wecom"
RAW_TYPE = "raw"
_BODY_PREVIEW_LIMIT = 600


def build_wecom_payload(content: str) -> Dict[str, Any]:
    return {"msgtype": "markdown", "markdown": {"content": content}}


class WebhookRelay:
    """Delivers final alert text to a routed destination webhook."""

    def __init__(self, *, timeout_seconds: float = 10.0, user_agent: str = "alert-relay") -> None:
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, config: AppConfig) -> "WebhookRelay":
        return cls(
            timeout_seconds=config.relay.timeout_seconds,
            user_agent=config.relay.user_agent,
        )

    async def deliver(self, route: Route, content: str) -> RelayResult:
        shape = WECOM_TYPE if route.type == WECOM_TYPE else RAW_TYPE
        try:
            async with HttpClient(
                timeout_seconds=self.timeout_seconds,
                user_agent=self.user_agent,
            ) as client:
                if shape == WECOM_TYPE:
                    response = await client.post_json(route.url, build_wecom_payload(content))
                else:
                    response = await client.post_text(route.url, content)
        except httpx.HTTPError as exc:
            logger.error(
                "Failed to forward. Key: %s, Type: %s, Error: %s: %s",
                route.key,
                shape,
                type(exc).__name__,
                exc,
            )
            raise RelayDeliveryError(f"Destination unreachable: {type(exc).__name__}") from exc

        if response.is_success:
            logger.info("Successfully forwarded alert for key '%s'.", route.key)
            return RelayResult(key=route.key, type=shape, status_code=response.status_code)

        body = response.text
        if len(body) > _BODY_PREVIEW_LIMIT:
            body = f"{body[:_BODY_PREVIEW_LIMIT]}..."
        logger.error(
            "Failed to forward. Key: %s, Type: %s, Status: %s, Body: %s",
            route.key,
            shape,
            response.status_code,
            body,
        )
        raise RelayDeliveryError(
            f"Destination responded with status {response.status_code}",
            status_code=response.status_code,
            body=body,
        )
