from __future__ import annotations

from typing import Optional

import httpx

from alert_relay.config import QUOTE_ENCODING, TENCENT_QUOTE_URL
from alert_relay.core.errors import ProviderExecutionError
from alert_relay.core.types import Market
from alert_relay.infra.http.client import HttpClient
from alert_relay.modules.market.classifier import quote_symbol


class TencentNameProvider:
    provider_id = "tencent"

    def __init__(self, client: HttpClient) -> None:
        self.client = client

    async def lookup_name(self, code: str, market: Market) -> Optional[str]:
        url = TENCENT_QUOTE_URL.format(symbol=quote_symbol(code, market))
        try:
            text = await self.client.get_text(url, encoding=QUOTE_ENCODING)
        except (httpx.HTTPError, UnicodeError, LookupError) as exc:
            raise ProviderExecutionError(f"tencent quote request failed: {type(exc).__name__}: {exc}") from exc
        return self.parse_name(text)

    @staticmethod
    def parse_name(text: str) -> Optional[str]:
        # v_sz002074="51~国轩高科~002074~22.80~...";
        parts = (text or "").split("~")
        if len(parts) < 2:
            return None
        name = parts[1].strip()
        return name or None
