from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class HttpClient:
    def __init__(
        self,
        timeout_seconds: float,
        user_agent: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpClient":
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_seconds),
            headers={
                "User-Agent": self.user_agent,
                "Accept": "text/plain,application/json,*/*",
            },
            follow_redirects=True,
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def get_text(
        self,
        url: str,
        *,
        encoding: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> str:
        response = await self._request("GET", url, headers=headers)
        response.raise_for_status()
        if encoding:
            # Quote endpoints declare no charset but answer in a legacy CJK encoding.
            return response.content.decode(encoding, errors="replace")
        return response.text

    async def post_text(self, url: str, text: str) -> httpx.Response:
        return await self._request(
            "POST",
            url,
            content=text.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )

    async def post_json(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        return await self._request("POST", url, json=payload)

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        if self._client is None:
            raise RuntimeError("HttpClient must be used as an async context manager.")
        return await self._client.request(method, url, **kwargs)
