from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from alert_relay.config import AppConfig
from alert_relay.core.contracts import NameProvider
from alert_relay.core.errors import ProviderExecutionError
from alert_relay.core.registry import ProviderRegistry
from alert_relay.core.types import Market, ResolvedName
from alert_relay.infra.http.client import HttpClient
from alert_relay.modules.market.classifier import classify
from alert_relay.modules.name_lookup.providers import SinaNameProvider, TencentNameProvider

logger = logging.getLogger(__name__)


class NameLookupService:
    """Resolves display names for security codes with ordered provider failover."""

    MODULE_NAME = "name_lookup"

    def __init__(
        self,
        config: AppConfig,
        registry: Optional[ProviderRegistry] = None,
        providers: Optional[Sequence[NameProvider]] = None,
    ) -> None:
        self.config = config
        self.registry = registry or ProviderRegistry()
        self.registry.register(self.MODULE_NAME, "sina", SinaNameProvider)
        self.registry.register(self.MODULE_NAME, "tencent", TencentNameProvider)
        self._providers = list(providers) if providers is not None else None
        self._timeout = config.lookup.timeout_seconds

    async def resolve_names(self, codes: Iterable[str]) -> Dict[str, ResolvedName]:
        distinct = list(dict.fromkeys(codes))
        if not distinct:
            return {}
        if self._providers is not None:
            return await self._resolve_all(distinct, self._providers)

        async with HttpClient(
            timeout_seconds=self._timeout,
            user_agent=self.config.lookup.user_agent,
        ) as client:
            providers = self.build_providers(client)
            return await self._resolve_all(distinct, providers)

    async def resolve_name(self, code: str) -> Optional[str]:
        resolved = await self.resolve_names([code])
        return resolved[code].name

    def build_providers(self, client: HttpClient) -> List[NameProvider]:
        provider_ids = []
        for provider_id in self.config.lookup.providers:
            if not self.registry.has(self.MODULE_NAME, provider_id):
                logger.warning("Skipping unknown name provider %r", provider_id)
                continue
            provider_ids.append(provider_id)
        return self.registry.resolve_chain(self.MODULE_NAME, provider_ids, client=client)

    async def _resolve_all(
        self, codes: List[str], providers: Sequence[NameProvider]
    ) -> Dict[str, ResolvedName]:
        rows = await asyncio.gather(
            *(self._resolve_one(code, providers) for code in codes)
        )
        return {row.code: row for row in rows}

    async def _resolve_one(
        self, code: str, providers: Sequence[NameProvider]
    ) -> ResolvedName:
        market = classify(code, permissive_sh=self.config.lookup.permissive_sh)
        if market == Market.UNKNOWN:
            logger.debug("No market found for code %s, skipping lookup", code)
            return ResolvedName(code=code, market=market)

        logger.debug("Identified market %s for code %s", market.value, code)
        for provider in providers:
            pid = getattr(provider, "provider_id", type(provider).__name__)
            try:
                name = await asyncio.wait_for(
                    provider.lookup_name(code, market),
                    timeout=self._timeout,
                )
            except asyncio.TimeoutError:
                logger.warning(
                    "Provider %s timed out (%.1fs) for name %s:%s",
                    pid,
                    self._timeout,
                    market.value,
                    code,
                )
                continue
            except ProviderExecutionError as exc:
                logger.warning("Provider %s failed for name %s:%s – %s", pid, market.value, code, exc)
                continue
            except Exception as exc:
                logger.warning(
                    "Provider %s failed for name %s:%s – %s: %s",
                    pid,
                    market.value,
                    code,
                    type(exc).__name__,
                    exc,
                )
                continue
            name = (name or "").strip()
            if name:
                logger.debug("Fetched name %r for code %s from %s", name, code, pid)
                return ResolvedName(code=code, market=market, name=name, source=pid)
        logger.debug("No name found for code %s", code)
        return ResolvedName(code=code, market=market)
