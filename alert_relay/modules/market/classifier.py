from __future__ import annotations

import re

from alert_relay.core.types import Market

_HK_CODE = re.compile(r"[0-9]{1,5}")
_CN_CODE = re.compile(r"[0-9]{6}")

_SH_LEADING = ("6", "5")
_SH_LEADING_PERMISSIVE = ("6", "5", "8")
_SZ_LEADING = ("0", "1", "3")


def classify(code: str, *, permissive_sh: bool = False) -> Market:
    raw = code if isinstance(code, str) else ""
    if _HK_CODE.fullmatch(raw):
        return Market.HK
    if _CN_CODE.fullmatch(raw):
        sh_leading = _SH_LEADING_PERMISSIVE if permissive_sh else _SH_LEADING
        if raw.startswith(sh_leading):
            return Market.SH
        if raw.startswith(_SZ_LEADING):
            return Market.SZ
    return Market.UNKNOWN


def provider_code(code: str, market: Market) -> str:
    # HK codes are queried as 5 digits, A-share codes as-is.
    if market == Market.HK:
        return code.zfill(5)
    return code


def quote_symbol(code: str, market: Market) -> str:
    return f"{market.prefix}{provider_code(code, market)}"
