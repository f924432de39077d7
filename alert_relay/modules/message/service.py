from __future__ import annotations

import logging
from typing import Dict, Optional

from alert_relay.config import AppConfig
from alert_relay.core.types import PipelineResult
from alert_relay.modules.message.beautifier import beautify as beautify_text
from alert_relay.modules.message.extractor import CodeExtractor, distinct_codes
from alert_relay.modules.message.normalizer import normalize
from alert_relay.modules.message.substitution import substitute
from alert_relay.modules.name_lookup.service import NameLookupService

logger = logging.getLogger(__name__)


class MessagePipeline:
    def __init__(self, config: AppConfig, lookup: Optional[NameLookupService] = None) -> None:
        self.config = config
        self.lookup = lookup or NameLookupService(config)
        self.extractor = CodeExtractor(
            config.extractor.labels,
            permissive_sh=config.lookup.permissive_sh,
        )

    async def process_payload(
        self,
        raw: bytes,
        content_type: Optional[str] = None,
        *,
        beautify: Optional[bool] = None,
        lookup: bool = True,
    ) -> PipelineResult:
        text = normalize(raw, content_type)
        logger.debug("Received message body: %s", text)
        return await self.process_text(text, beautify=beautify, lookup=lookup)

    async def process_text(
        self,
        text: str,
        *,
        beautify: Optional[bool] = None,
        lookup: bool = True,
    ) -> PipelineResult:
        source = (text or "").strip()
        matches = self.extractor.extract(source)
        already_formatted = not matches and self.extractor.is_formatted(source)
        if already_formatted:
            logger.debug("Message appears to be already name-formatted")

        names: Dict[str, Optional[str]] = {}
        codes = distinct_codes(matches)
        if codes:
            logger.debug("Found codes to resolve: %s", ", ".join(codes))
        if codes and lookup:
            resolved = await self.lookup.resolve_names(codes)
            names = {code: row.name for code, row in resolved.items()}
        else:
            names = {code: None for code in codes}

        content = substitute(
            source,
            matches,
            names,
            paren_style=self.config.message.paren_style,
            layout=self.config.message.single_line_layout,
        )

        use_beautifier = self.config.message.beautify if beautify is None else beautify
        beautified = False
        if use_beautifier:
            pretty = beautify_text(content, self.config.extractor.labels)
            beautified = pretty != content
            content = pretty

        logger.debug("Final content: %s", content)
        return PipelineResult(
            content=content,
            source_text=source,
            matches=matches,
            names=names,
            already_formatted=already_formatted,
            beautified=beautified,
        )
