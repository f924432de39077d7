"""Locate labelled security codes inside free-form alert text.

Two forms are recognised for every configured label (for example ``标的``):

* plain: ``标的: 159565`` or ``标的 ：159565,`` - a candidate for lookup;
* formatted: ``标的:恒生科技(159565)`` or ``标的：（159565）`` - already
  rendered, never extracted again.

Formatted spans are collected first and plain candidates overlapping them
are discarded, so a second pass over pipeline output finds nothing new.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Sequence, Tuple

from alert_relay.config import DEFAULT_LABELS
from alert_relay.core.types import ExtractionMatch
from alert_relay.modules.market.classifier import classify

COLONS = ":："
COMMAS = ",，"
OPEN_PARENS = "(（"
CLOSE_PARENS = ")）"

# Horizontal whitespace only; a match never crosses a line.
_HSPACE = r"[^\S\n]*"


def _label_alternation(labels: Iterable[str]) -> str:
    ordered = sorted({label for label in labels if label}, key=len, reverse=True)
    return "|".join(re.escape(label) for label in ordered)


class CodeExtractor:
    def __init__(
        self,
        labels: Optional[Sequence[str]] = None,
        *,
        permissive_sh: bool = False,
    ) -> None:
        self.labels = list(labels or DEFAULT_LABELS)
        self.permissive_sh = permissive_sh
        alternation = _label_alternation(self.labels)
        head = rf"(?P<label>{alternation}){_HSPACE}[{COLONS}]{_HSPACE}"
        self._plain = re.compile(
            head + rf"(?P<code>[0-9]{{1,6}})(?![0-9])(?=[^\S\n]|[{COMMAS}]|$)",
            re.MULTILINE,
        )
        self._formatted = re.compile(
            head
            + rf"(?P<name>[^0-9\s{OPEN_PARENS}{COMMAS}][^\n{OPEN_PARENS}{COMMAS}]*?)?"
            + rf"{_HSPACE}[{OPEN_PARENS}]{_HSPACE}(?P<code>[0-9]{{1,6}}){_HSPACE}[{CLOSE_PARENS}]",
            re.MULTILINE,
        )

    def formatted_spans(self, text: str) -> List[Tuple[int, int, str]]:
        return [(m.start(), m.end(), m.group("code")) for m in self._formatted.finditer(text or "")]

    def is_formatted(self, text: str) -> bool:
        return bool(self.formatted_spans(text))

    def extract(self, text: str) -> List[ExtractionMatch]:
        source = text or ""
        formatted = self.formatted_spans(source)
        matches: List[ExtractionMatch] = []
        for m in self._plain.finditer(source):
            if any(start < m.end() and m.start() < end for start, end, _ in formatted):
                continue
            code = m.group("code")
            matches.append(
                ExtractionMatch(
                    span=m.group(0),
                    start=m.start(),
                    end=m.end(),
                    label=m.group("label"),
                    code=code,
                    market=classify(code, permissive_sh=self.permissive_sh),
                )
            )
        return matches


def extract_codes(text: str, labels: Optional[Sequence[str]] = None) -> List[ExtractionMatch]:
    return CodeExtractor(labels).extract(text)


def distinct_codes(matches: Iterable[ExtractionMatch]) -> List[str]:
    return list(dict.fromkeys(match.code for match in matches))
