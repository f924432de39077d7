from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence, Tuple

from alert_relay.config import DEFAULT_LABELS
from alert_relay.core.types import Alert, Direction

# Evaluated in order; the first keyword hit decides the direction.
DIRECTION_RULES: List[Tuple[Tuple[str, ...], Direction]] = [
    (("卖", "空", "sell", "short"), Direction.SHORT),
    (("买", "多", "buy", "long"), Direction.LONG),
    (("止损", "stop"), Direction.STOP),
]

DIRECTION_ICONS: Dict[Direction, str] = {
    Direction.LONG: "🟢",
    Direction.SHORT: "🔴",
    Direction.STOP: "⛔",
    Direction.NEUTRAL: "⚪",
}

FIELD_LABELS: Dict[str, Tuple[str, ...]] = {
    "period": ("周期", "period", "interval", "timeframe"),
    "price": ("当前价格", "价格", "price", "close"),
    "signal": ("信号", "signal", "action"),
    "indicator": ("指标", "策略", "indicator", "strategy"),
}

SEPARATOR = " | "

_SEGMENT_SPLIT = re.compile(r"[\n,，]")
_KEY_VALUE = re.compile(r"^\s*([^:：]{1,20}?)\s*[:：]\s*(.*?)\s*$")


def classify_direction(signal: str) -> Direction:
    lowered = (signal or "").lower()
    for keywords, direction in DIRECTION_RULES:
        if any(keyword in lowered for keyword in keywords):
            return direction
    return Direction.NEUTRAL


def split_chunks(text: str, labels: Sequence[str] = DEFAULT_LABELS) -> List[List[str]]:
    chunks: List[List[str]] = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        if _label_value(line, labels) is not None:
            chunks.append([line])
        elif chunks:
            chunks[-1].append(line)
        # Lines before the first labelled line belong to no alert.
    return chunks


def parse_alert(chunk: Sequence[str], labels: Sequence[str] = DEFAULT_LABELS) -> Optional[Alert]:
    fields: Dict[str, str] = {}
    free_text: List[str] = []
    stock: Optional[str] = None
    for segment in _SEGMENT_SPLIT.split("\n".join(chunk)):
        segment = segment.strip()
        if not segment:
            continue
        if stock is None:
            value = _label_value(segment, labels)
            if value is not None:
                stock = value
                continue
        matched = _KEY_VALUE.match(segment)
        field = _field_for(matched.group(1)) if matched else None
        if field and matched is not None:
            fields.setdefault(field, matched.group(2))
        else:
            free_text.append(segment)

    if not stock:
        return None
    signal = fields.get("signal") or " ".join(free_text) or None
    return Alert(
        stock=stock,
        period=fields.get("period") or None,
        price=fields.get("price") or None,
        signal=signal,
        indicator=fields.get("indicator") or None,
        direction=classify_direction(signal or ""),
    )


def render_alert(alert: Alert) -> str:
    details = []
    if alert.period:
        details.append(f"周期 {alert.period}")
    if alert.price:
        details.append(f"价格 {alert.price}")
    if alert.signal:
        details.append(alert.signal)
    if alert.indicator:
        details.append(alert.indicator)
    head = f"- {DIRECTION_ICONS[alert.direction]} **{alert.stock}**"
    if not details:
        return head
    return f"{head}{SEPARATOR}{SEPARATOR.join(details)}"


def beautify(text: str, labels: Sequence[str] = DEFAULT_LABELS) -> str:
    alerts = [
        alert
        for alert in (parse_alert(chunk, labels) for chunk in split_chunks(text, labels))
        if alert is not None
    ]
    if not alerts:
        return text
    return "\n".join(render_alert(alert) for alert in alerts)


def _label_value(line: str, labels: Sequence[str]) -> Optional[str]:
    stripped = line.strip()
    for label in labels:
        if not stripped.startswith(label):
            continue
        rest = stripped[len(label) :].lstrip()
        if rest[:1] in (":", "："):
            return rest[1:].strip()
    return None


def _field_for(key: str) -> Optional[str]:
    lowered = key.strip().lower()
    for field, synonyms in FIELD_LABELS.items():
        if lowered in synonyms:
            return field
    return None
