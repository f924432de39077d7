from __future__ import annotations

import codecs
import json
import logging
from typing import Any, Dict, Optional

from alert_relay.core.utils import compact_json, parse_json_object

logger = logging.getLogger(__name__)


def normalize(raw: bytes | str, content_type: Optional[str] = None) -> str:
    """Turn an inbound webhook body into plain alert text.

    The body is decoded (utf-8 unless the content type names another
    charset) and, whatever the declared type, tried as a JSON object.  An
    object becomes one ``key: value`` line per key in source order; nested
    values are kept as compact JSON.  Anything else, malformed JSON
    included, is used verbatim.  The result is always stripped.
    """
    text = decode_body(raw, content_type)
    payload = parse_json_object(text)
    if payload:
        logger.debug("Structured payload with %d keys", len(payload))
        return flatten_payload(payload).strip()
    if _declares_json(content_type):
        logger.debug("Declared JSON body did not parse as an object, using raw text")
    return text.strip()


def decode_body(raw: bytes | str, content_type: Optional[str] = None) -> str:
    if isinstance(raw, str):
        return raw
    encoding = _charset(content_type) or "utf-8"
    return bytes(raw or b"").decode(encoding, errors="replace")


def flatten_payload(payload: Dict[str, Any]) -> str:
    return "\n".join(f"{key}: {render_value(value)}" for key, value in payload.items())


def render_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return compact_json(value)
    # Numbers, booleans and null keep their JSON spelling.
    return json.dumps(value, ensure_ascii=False)


def _declares_json(content_type: Optional[str]) -> bool:
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def _charset(content_type: Optional[str]) -> Optional[str]:
    for param in (content_type or "").split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() != "charset":
            continue
        charset = value.strip().strip('"').lower()
        try:
            codecs.lookup(charset)
        except LookupError:
            logger.warning("Unknown charset %r in content type, falling back to utf-8", charset)
            return None
        return charset
    return None
