from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Market(str, Enum):
    HK = "HK"
    SH = "SH"
    SZ = "SZ"
    UNKNOWN = "UNKNOWN"

    @property
    def prefix(self) -> str:
        # Quote endpoints key symbols as lower-case market prefix + code.
        return self.value.lower()


class Direction(str, Enum):
    LONG = "long"
    SHORT = "short"
    STOP = "stop"
    NEUTRAL = "neutral"


class ExtractionMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    span: str
    start: int
    end: int
    label: str
    code: str
    market: Market


class ResolvedName(BaseModel):
    code: str
    market: Market
    name: Optional[str] = None
    source: str = ""


class Route(BaseModel):
    key: str
    url: str
    type: str = "raw"


class Alert(BaseModel):
    stock: str
    period: Optional[str] = None
    price: Optional[str] = None
    signal: Optional[str] = None
    indicator: Optional[str] = None
    direction: Direction = Direction.NEUTRAL


class PipelineResult(BaseModel):
    content: str
    source_text: str
    matches: List[ExtractionMatch] = Field(default_factory=list)
    names: Dict[str, Optional[str]] = Field(default_factory=dict)
    already_formatted: bool = False
    beautified: bool = False


class RelayResult(BaseModel):
    key: str
    type: str
    status_code: int
