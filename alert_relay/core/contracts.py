from __future__ import annotations

from typing import Optional, Protocol

from alert_relay.core.types import Market, Route


class NameProvider(Protocol):
    provider_id: str

    async def lookup_name(self, code: str, market: Market) -> Optional[str]:
        ...


class RouteLookup(Protocol):
    def route_for(self, key: str) -> Optional[Route]:
        ...
