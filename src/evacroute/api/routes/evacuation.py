"""Evacuation point endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Response, status

from ...data.evacuation_points import load_evacuation_points
from ...schemas.routing import EvacuationPointModel, EvacuationRequest, EvacuationResponse, RankedDestinationModel
from ...services.outputs.routing_formatter import ranked_destinations_to_csv, ranked_destinations_to_geojson
from ...services.routing.service import (
    nearest_evacuation_point,
    rank_evacuation_points,
    ranked_evacuation_points,
)

router = APIRouter(prefix="/evacuation", tags=["evacuation"])


@router.get("/points", response_model=list[EvacuationPointModel], status_code=status.HTTP_200_OK)
def list_points() -> list[EvacuationPointModel]:
    """Configured evacuation point catalogue."""
    try:
        points = load_evacuation_points()
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc
    return [
        EvacuationPointModel(
            name=point.name,
            lng=point.coordinate.longitude,
            lat=point.coordinate.latitude,
            type=point.category,
        )
        for point in points
    ]


@router.post("/rank", response_model=EvacuationResponse, status_code=status.HTTP_200_OK)
def rank(payload: EvacuationRequest) -> EvacuationResponse:
    """Rank evacuation points by fastest route.

    Unreachable points are left out. ``status`` is ``none`` when nothing is
    reachable and ``partial`` when some points were dropped.
    """
    try:
        return rank_evacuation_points(payload)
    except (ValueError, FileNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error ranking evacuation points: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to rank evacuation points: {str(exc)}"
        ) from exc


@router.post("/rank/geojson", status_code=status.HTTP_200_OK)
def rank_geojson(payload: EvacuationRequest) -> dict:
    try:
        return ranked_destinations_to_geojson(ranked_evacuation_points(payload))
    except (ValueError, FileNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error exporting evacuation routes as GeoJSON: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export evacuation routes: {str(exc)}"
        ) from exc


@router.post("/rank/csv", status_code=status.HTTP_200_OK)
def rank_csv(payload: EvacuationRequest) -> Response:
    try:
        content = ranked_destinations_to_csv(ranked_evacuation_points(payload))
    except (ValueError, FileNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error exporting evacuation routes as CSV: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to export evacuation routes: {str(exc)}"
        ) from exc
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="evacuation_routes.csv"'},
    )


@router.post("/nearest", response_model=RankedDestinationModel, status_code=status.HTTP_200_OK)
def nearest(payload: EvacuationRequest) -> RankedDestinationModel:
    try:
        result = nearest_evacuation_point(payload)
    except (ValueError, FileNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error finding nearest evacuation point: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to find nearest evacuation point: {str(exc)}"
        ) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No routes available to any evacuation point.",
        )
    return result
