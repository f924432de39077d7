from __future__ import annotations

from typing import Optional


class AlertRelayError(Exception):
    """Base exception for application-level errors."""


class ProviderNotFoundError(AlertRelayError):
    """Raised when a provider id cannot be resolved."""


class ProviderExecutionError(AlertRelayError):
    """Raised when a single provider call fails to return a usable response."""


class ValidationError(AlertRelayError):
    """Raised when request payload fails domain-level validation."""


class RouteNotFoundError(AlertRelayError):
    """Raised when a routing key is unknown or has no destination url."""


class RelayDeliveryError(AlertRelayError):
    """Raised when the destination webhook is unreachable or answers non-2xx."""

    def __init__(self, message: str, *, status_code: Optional[int] = None, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
