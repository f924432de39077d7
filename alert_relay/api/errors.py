"""Shared error handling utilities for API routers."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from alert_relay.core.errors import RelayDeliveryError, RouteNotFoundError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def service_errors(
    *,
    validation_status: int = 400,
    not_found_status: int = 404,
    relay_status: int = 502,
) -> Iterator[None]:
    """Map service exceptions raised inside the block to HTTPException.

    Anything unexpected is logged with its traceback and reported as a bare
    500 so internals never reach the caller.
    """
    try:
        yield
    except HTTPException:
        raise
    except ValidationError as exc:
        raise HTTPException(status_code=validation_status, detail=str(exc)) from exc
    except RouteNotFoundError as exc:
        raise HTTPException(status_code=not_found_status, detail=str(exc)) from exc
    except RelayDeliveryError as exc:
        raise HTTPException(
            status_code=relay_status,
            detail={
                "error": str(exc),
                "status": exc.status_code,
                "body": exc.body,
            },
        ) from exc
    except Exception as exc:
        logger.exception("Webhook error: %s", exc)
        raise HTTPException(status_code=500, detail="Internal Server Error") from exc


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> ORJSONResponse:
    del request
    detail = exc.detail
    if isinstance(detail, dict):
        content = {"success": False, **detail}
    else:
        content = {"success": False, "error": detail}
    return ORJSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
