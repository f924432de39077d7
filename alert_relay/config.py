from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator

SINA_QUOTE_URL = "https://hq.sinajs.cn/list={symbol}"
TENCENT_QUOTE_URL = "https://qt.gtimg.cn/q={symbol}"
SINA_REFERER = "https://finance.sina.com.cn/"
QUOTE_ENCODING = "gbk"

DEFAULT_LABELS = ["标的"]
# Field keywords that open a new line when a single-line alert is exploded.
FIELD_KEYWORDS = ["周期:", "信号:", "级别:", "交易所时间:", "价格:", "原因:", "当前价格:"]


class RouteConfig(BaseModel):
    url: str = ""
    type: str = "raw"

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, value):
        text = str(value or "").strip().lower()
        return text or "raw"


class LookupConfig(BaseModel):
    providers: List[str] = Field(default_factory=lambda: ["sina", "tencent"])
    timeout_seconds: float = Field(default=3.0, ge=0.5, le=10.0)
    permissive_sh: bool = False
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )


class ExtractorConfig(BaseModel):
    labels: List[str] = Field(default_factory=lambda: list(DEFAULT_LABELS))

    @field_validator("labels")
    @classmethod
    def _non_empty_labels(cls, value: List[str]) -> List[str]:
        cleaned = [item.strip() for item in value if item and item.strip()]
        return cleaned or list(DEFAULT_LABELS)


class MessageConfig(BaseModel):
    single_line_layout: str = Field(default="two_line", pattern="^(two_line|field_per_line)$")
    paren_style: str = Field(default="auto", pattern="^(auto|ascii|fullwidth)$")
    beautify: bool = False


class RelayConfig(BaseModel):
    timeout_seconds: float = Field(default=10.0, ge=1.0, le=60.0)
    user_agent: str = "alert-relay/0.3.0"


class AppConfig(BaseModel):
    config_file: Path = Path("config/settings.yaml")
    lookup: LookupConfig = Field(default_factory=LookupConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    message: MessageConfig = Field(default_factory=MessageConfig)
    relay: RelayConfig = Field(default_factory=RelayConfig)
    routes: Dict[str, RouteConfig] = Field(default_factory=dict)


def default_app_config() -> AppConfig:
    return AppConfig()
