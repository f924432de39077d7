from __future__ import annotations

from typing import Optional

import httpx

from alert_relay.config import QUOTE_ENCODING, SINA_QUOTE_URL, SINA_REFERER
from alert_relay.core.errors import ProviderExecutionError
from alert_relay.core.types import Market
from alert_relay.infra.http.client import HttpClient
from alert_relay.modules.market.classifier import quote_symbol


class SinaNameProvider:
    provider_id = "sina"

    def __init__(self, client: HttpClient) -> None:
        self.client = client

    async def lookup_name(self, code: str, market: Market) -> Optional[str]:
        url = SINA_QUOTE_URL.format(symbol=quote_symbol(code, market))
        try:
            text = await self.client.get_text(
                url,
                encoding=QUOTE_ENCODING,
                headers={"Referer": SINA_REFERER},
            )
        except (httpx.HTTPError, UnicodeError, LookupError) as exc:
            raise ProviderExecutionError(f"sina quote request failed: {type(exc).__name__}: {exc}") from exc
        return self.parse_name(text)

    @staticmethod
    def parse_name(text: str) -> Optional[str]:
        # var hq_str_sz002074="国轩高科,22.800,...";
        parts = (text or "").split('"')
        if len(parts) < 2:
            return None
        name = parts[1].split(",")[0].strip()
        return name or None
