from __future__ import annotations

import json
import logging
from typing import Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from alert_relay.config import RouteConfig
from alert_relay.core.types import Route

logger = logging.getLogger(__name__)


class RouteTable:
    """Read-only routing key -> destination table, built once at startup."""

    def __init__(self, routes: Optional[Mapping[str, RouteConfig]] = None) -> None:
        self._routes: Dict[str, RouteConfig] = dict(routes or {})

    @classmethod
    def from_sources(
        cls,
        file_routes: Optional[Mapping[str, RouteConfig]] = None,
        env_value: Optional[str] = None,
    ) -> "RouteTable":
        merged: Dict[str, RouteConfig] = dict(file_routes or {})
        if env_value is None:
            logger.warning("WEBHOOK_CONFIG environment variable is not set.")
        else:
            merged.update(parse_webhook_config(env_value))
        return cls(merged)

    def route_for(self, key: str) -> Optional[Route]:
        config = self._routes.get(key)
        if config is None or not config.url.strip():
            return None
        return Route(key=key, url=config.url.strip(), type=config.type)

    def keys(self) -> List[str]:
        return sorted(self._routes.keys())

    def describe(self) -> List[Dict[str, object]]:
        return [
            {
                "key": key,
                "type": self._routes[key].type,
                "configured": bool(self._routes[key].url.strip()),
            }
            for key in self.keys()
        ]


def parse_webhook_config(raw: str) -> Dict[str, RouteConfig]:
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        logger.error("Could not parse WEBHOOK_CONFIG, check its JSON format: %s", exc)
        return {}
    if not isinstance(payload, dict):
        logger.error("WEBHOOK_CONFIG must be a JSON object, got %s", type(payload).__name__)
        return {}

    routes: Dict[str, RouteConfig] = {}
    for key, value in payload.items():
        if not isinstance(value, dict):
            logger.warning("Ignoring route %r: expected an object with 'url'", key)
            continue
        try:
            routes[str(key)] = RouteConfig.model_validate(value)
        except PydanticValidationError as exc:
            logger.warning("Ignoring route %r: %s", key, exc)
    return routes
