"""Route computation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import InstructionsRequest, InstructionsResponse, RouteRequest, RouteResponse
from ...services.routing.errors import NoRouteFound, ProviderError, ProviderUnavailable, RoutingError
from ...services.routing.service import RouteIndexError, compute_routes, route_instructions

router = APIRouter(prefix="/routes", tags=["routes"])


def routing_http_error(exc: RoutingError) -> HTTPException:
    """Translate a routing failure into the HTTP status the UI keys off."""
    if isinstance(exc, NoRouteFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No route found: {exc}")
    if isinstance(exc, ProviderUnavailable):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    if isinstance(exc, ProviderError):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


@router.post("/compute", response_model=RouteResponse, status_code=status.HTTP_200_OK)
def compute(payload: RouteRequest) -> RouteResponse:
    try:
        return compute_routes(payload)
    except RoutingError as exc:
        raise routing_http_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error calculating escape route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate route: {str(exc)}"
        ) from exc


@router.post("/instructions", response_model=InstructionsResponse, status_code=status.HTTP_200_OK)
def instructions(payload: InstructionsRequest) -> InstructionsResponse:
    """Turn-by-turn directions for one candidate route."""
    try:
        return route_instructions(payload)
    except RouteIndexError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RoutingError as exc:
        raise routing_http_error(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error building route instructions: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to build route instructions: {str(exc)}"
        ) from exc
