"""Shared utility functions used across multiple modules."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional


def parse_json_object(content: str) -> Optional[Dict[str, Any]]:
    """Parse *content* as a JSON object.

    Returns ``None`` when *content* is empty, not valid JSON, or does not
    decode to a ``dict``.  Unlike a lenient parser this never digs an object
    out of surrounding prose: alert text that merely contains braces must stay
    plain text.
    """
    if not content or not content.strip():
        return None
    try:
        parsed = json.loads(content)
    except (TypeError, ValueError):
        return None
    if isinstance(parsed, dict):
        return parsed
    return None


def compact_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
