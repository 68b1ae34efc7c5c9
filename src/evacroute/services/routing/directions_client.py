"""HTTP client for the directions provider (Mapbox Directions v5 compatible)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ...config import settings
from ...models.domain import Coordinate
from .errors import NoRouteFound, ProviderError, ProviderUnavailable
from .models import RouteOptions

# Provider codes meaning "request was fine, there is just no path".
NO_ROUTE_CODES = frozenset({"NoRoute", "NoSegment"})
TRAFFIC_AWARE_PROFILES = frozenset({"driving-traffic"})

logger = logging.getLogger(__name__)


def _flag(value: bool) -> str:
    return "true" if value else "false"


class DirectionsClient:
    def __init__(
        self,
        base_url: str | None = None,
        profile: str | None = None,
        access_token: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.directions_base_url or "").rstrip("/")
        if not self.base_url:
            raise ValueError("Directions base URL is not configured.")
        self.access_token = access_token or settings.directions_access_token
        if not self.access_token:
            raise ValueError("Directions access token is not configured.")
        self.profile = profile or settings.directions_profile
        self.timeout = timeout if timeout is not None else settings.directions_timeout_seconds
        self._transport = transport

    @property
    def traffic_aware(self) -> bool:
        return self.profile in TRAFFIC_AWARE_PROFILES

    def _get_client(self) -> httpx.Client:
        """Create a fresh client per request; nothing is shared between lookups."""
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            transport=self._transport,
        )

    def build_params(self, options: RouteOptions) -> dict[str, str]:
        return {
            "alternatives": _flag(options.alternatives),
            "steps": _flag(options.include_steps),
            "geometries": options.geometries,
            "overview": options.overview.value,
            "annotations": ",".join(options.annotations),
            "access_token": self.access_token,
        }

    def build_url(self, start: Coordinate, end: Coordinate) -> str:
        coordinate_str = f"{start.longitude},{start.latitude};{end.longitude},{end.latitude}"
        return f"{self.base_url}/{self.profile}/{coordinate_str}"

    def route(self, start: Coordinate, end: Coordinate, options: RouteOptions | None = None) -> dict[str, Any]:
        """Request route alternatives between two points.

        Makes exactly one request. Transport failures raise ProviderUnavailable,
        non-success answers raise ProviderError and "no path" answers raise
        NoRouteFound. Retrying is left to the caller.

        Returns:
            The decoded JSON body with a ``routes`` list.
        """
        options = options or RouteOptions()
        url = self.build_url(start, end)
        params = self.build_params(options)
        logger.debug(f"Requesting directions {self.profile} {start.as_lon_lat()} -> {end.as_lon_lat()}")

        client = self._get_client()
        try:
            try:
                response = client.get(url, params=params)
            except httpx.TransportError as exc:
                raise ProviderUnavailable(
                    f"Failed to reach directions provider at {self.base_url}: {exc}"
                ) from exc
        finally:
            client.close()

        data = self._decode(response)
        if not response.is_success:
            raise ProviderError(response.status_code, str(data.get("message", "")) if data else "")
        if data is None:
            raise ProviderError(response.status_code, "Response body is not a JSON object")

        code = data.get("code")
        if code in NO_ROUTE_CODES:
            raise NoRouteFound(data.get("message") or f"No route found ({code})")
        if code is not None and code != "Ok":
            raise ProviderError(response.status_code, str(data.get("message") or code))
        return data

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any] | None:
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None


def decode_polyline(polyline: str, precision: int = 5) -> list[Coordinate]:
    """Decode an encoded polyline string into coordinates.

    Args:
        polyline: Encoded polyline (Google algorithm, as returned with geometries=polyline)
        precision: Number of decimal places encoded (5 for polyline, 6 for polyline6)

    Returns:
        List of Coordinate in path order
    """
    factor = 10 ** precision
    coordinates: list[Coordinate] = []
    index = 0
    lat = 0
    lon = 0

    def _next_value() -> int:
        nonlocal index
        shift = 0
        result = 0
        while True:
            if index >= len(polyline):
                raise ValueError("Truncated polyline")
            b = ord(polyline[index]) - 63
            index += 1
            result |= (b & 0x1f) << shift
            shift += 5
            if b < 0x20:
                break
        return ~(result >> 1) if (result & 1) else (result >> 1)

    while index < len(polyline):
        lat += _next_value()
        lon += _next_value()
        coordinates.append(Coordinate(longitude=lon / factor, latitude=lat / factor))

    return coordinates


def check_health(base_url: str | None = None, access_token: str | None = None) -> bool:
    """Check directions provider health with a minimal two-point request."""
    try:
        client = DirectionsClient(base_url=base_url, access_token=access_token, timeout=5.0)
        # Two points in San Francisco
        client.route(
            Coordinate(longitude=-122.4194, latitude=37.7749),
            Coordinate(longitude=-122.4089, latitude=37.7837),
            RouteOptions(alternatives=False, include_steps=False),
        )
        return True
    except (ValueError, NoRouteFound, ProviderError, ProviderUnavailable) as exc:
        logger.debug(f"Directions health check failed: {exc}")
        return False
