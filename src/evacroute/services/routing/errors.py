"""Errors raised while computing routes."""

from __future__ import annotations

from typing import Optional


class RoutingError(Exception):
    """Base class for every failure a route lookup can end with."""


class ProviderUnavailable(RoutingError):
    """The directions provider could not be reached (DNS, connect, timeout)."""


class ProviderError(RoutingError):
    """The directions provider answered but reported a failure."""

    def __init__(self, status_code: Optional[int], message: str = "") -> None:
        self.status_code = status_code
        self.message = message
        detail = "Directions provider error" if status_code is None else f"Directions provider error: {status_code}"
        if message:
            detail = f"{detail} ({message})"
        super().__init__(detail)


class NoRouteFound(RoutingError):
    """The provider answered successfully but returned no route."""
