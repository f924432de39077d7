from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class WebhookResponse(BaseModel):
    success: bool = True
    message: str = ""


class PreviewCode(BaseModel):
    code: str
    market: str
    name: Optional[str] = None


class PreviewResponse(BaseModel):
    content: str
    codes: List[PreviewCode] = Field(default_factory=list)
    names: Dict[str, Optional[str]] = Field(default_factory=dict)
    already_formatted: bool = False
    beautified: bool = False


class RouteInfo(BaseModel):
    key: str
    type: str
    configured: bool
