from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from src.adapters.api.dependencies import get_poi_query_service
from src.adapters.api.schemas.poi import PointOfInterestSchema
from src.app.services.poi_query_service import PoiQueryService
from src.domain.models import BoundingBox, GeoPoint

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/poi", tags=["poi"])


def _to_schema(points: tuple[GeoPoint, ...]) -> list[PointOfInterestSchema]:
    return [
        PointOfInterestSchema(name=p.name, longitude=p.longitude, latitude=p.latitude)
        for p in points
    ]


@router.get("/v1/fetch", response_model=list[PointOfInterestSchema])
def fetch(
    service: PoiQueryService = Depends(get_poi_query_service),
) -> list[PointOfInterestSchema]:
    points = service.fetch_all()
    logger.info("[v1]: Responding with %d points of interest.", len(points))
    return _to_schema(points)


@router.get("/v2/fetch/{bounds}", response_model=list[PointOfInterestSchema])
def fetch_within(
    bounds: str,
    service: PoiQueryService = Depends(get_poi_query_service),
) -> list[PointOfInterestSchema]:
    points = service.fetch_within(BoundingBox.parse(bounds))
    logger.info(
        "[v2]: Responding with %d points of interest for bounds (%s)",
        len(points),
        bounds,
    )
    return _to_schema(points)


@router.get("/v3/fetch/{bounds}/{zoom}", response_model=list[PointOfInterestSchema])
def fetch_within_zoom(
    bounds: str,
    zoom: int,
    service: PoiQueryService = Depends(get_poi_query_service),
) -> list[PointOfInterestSchema]:
    # Bounds are not needed for the cluster view, so bad bounds only fail zoomed-in requests.
    box = BoundingBox.parse(bounds) if zoom >= service.zoom_threshold else None
    points = service.resolve(zoom=zoom, box=box)
    logger.info(
        "[v3]: Responding with %d points of interest for bounds (%s) @ zoom %d",
        len(points),
        bounds,
        zoom,
    )
    return _to_schema(points)
