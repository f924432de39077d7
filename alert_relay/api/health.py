"""Health and routing overview routes."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends

from alert_relay.api.deps import get_route_table
from alert_relay.schemas import RouteInfo
from alert_relay.services.route_table import RouteTable

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/routes", response_model=List[RouteInfo])
async def routes(route_table: RouteTable = Depends(get_route_table)) -> List[RouteInfo]:
    return [RouteInfo(**row) for row in route_table.describe()]
