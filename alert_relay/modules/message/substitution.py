from __future__ import annotations

import logging
import re
from typing import List, Mapping, Optional, Sequence

from alert_relay.config import FIELD_KEYWORDS
from alert_relay.core.types import ExtractionMatch

logger = logging.getLogger(__name__)

ASCII_STYLE = "ascii"
FULLWIDTH_STYLE = "fullwidth"

_STYLE_GLYPHS = {
    ASCII_STYLE: (":", "(", ")"),
    FULLWIDTH_STYLE: ("：", "（", "）"),
}

_LEADING_SEPARATORS = " \t\r,，"

_FIELD_BREAK = re.compile(
    r"[\s,，]*("
    + "|".join(
        re.escape(keyword.rstrip(":"))
        for keyword in sorted(FIELD_KEYWORDS, key=len, reverse=True)
    )
    + r")[^\S\n]*([:：])"
)
_COMMA_BREAK = re.compile(r"[,，][^\S\n]*")


def choose_paren_style(text: str, preference: str = "auto") -> str:
    if preference in _STYLE_GLYPHS:
        return preference
    if "：" in text or "（" in text:
        return FULLWIDTH_STYLE
    return ASCII_STYLE


def render_match(match: ExtractionMatch, name: Optional[str], style: str = ASCII_STYLE) -> str:
    if not name:
        return match.span
    colon, open_paren, close_paren = _STYLE_GLYPHS[style]
    return f"{match.label}{colon}{name}{open_paren}{match.code}{close_paren}"


def is_single_line(text: str) -> bool:
    return "\n" not in text.strip()


def substitute(
    text: str,
    matches: Sequence[ExtractionMatch],
    names: Mapping[str, Optional[str]],
    *,
    paren_style: str = "auto",
    layout: str = "two_line",
) -> str:
    """Write resolved names back over their matched spans.

    A code without a resolved name keeps its original span, so no digit
    string ever disappears from the output.  Single-line alerts are laid out
    as blocks (``two_line``: stock line, then the trailing fields;
    ``field_per_line``: one field per line).  Multi-line alerts only have
    the matched spans replaced.
    """
    if not matches:
        if layout == "field_per_line" and is_single_line(text):
            return explode_fields(text)
        return text

    style = choose_paren_style(text, paren_style)
    ordered = sorted(matches, key=lambda item: item.start)
    rendered = [render_match(match, names.get(match.code), style) for match in ordered]

    if not is_single_line(text):
        logger.debug("Multi-line alert, replacing %d span(s) in place", len(ordered))
        return _replace_in_place(text, ordered, rendered)

    logger.debug("Single-line alert, %s layout over %d match(es)", layout, len(ordered))
    blocks = _single_line_blocks(text, ordered, rendered)
    if layout == "field_per_line":
        return "\n".join(explode_fields(block) for block in blocks)
    return "\n".join(blocks)


def explode_fields(text: str) -> str:
    """Put every known field keyword and every comma-separated part on its own line."""
    exploded = _FIELD_BREAK.sub(lambda m: f"\n{m.group(1)}{m.group(2)}", text)
    exploded = _COMMA_BREAK.sub("\n", exploded)
    return "\n".join(line.strip() for line in exploded.split("\n") if line.strip())


def _replace_in_place(
    text: str, matches: Sequence[ExtractionMatch], rendered: Sequence[str]
) -> str:
    parts: List[str] = []
    cursor = 0
    for match, replacement in zip(matches, rendered):
        parts.append(text[cursor : match.start])
        parts.append(replacement)
        cursor = match.end
    parts.append(text[cursor:])
    return "".join(parts)


def _single_line_blocks(
    text: str, matches: Sequence[ExtractionMatch], rendered: Sequence[str]
) -> List[str]:
    lines: List[str] = []
    prefix = _trim_fragment(text[: matches[0].start])
    if prefix:
        lines.append(prefix)
    for index, (match, replacement) in enumerate(zip(matches, rendered)):
        lines.append(replacement)
        stop = matches[index + 1].start if index + 1 < len(matches) else len(text)
        remainder = _trim_fragment(text[match.end : stop])
        if remainder:
            lines.append(remainder)
    return lines


def _trim_fragment(fragment: str) -> str:
    return fragment.strip().strip(_LEADING_SEPARATORS).strip()
