from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.poi import router as poi_router
from src.adapters.api.dependencies import get_poi_query_service
from src.adapters.api.schemas.poi import HealthSchema
from src.app.services.poi_query_service import PoiQueryService
from src.domain.exceptions import ClusterUnavailable, ComputeFailure, ParseError


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    # Load the data set before accepting traffic.
    get_poi_query_service()
    yield


app = FastAPI(title="POI Query Service", lifespan=lifespan)
app.include_router(poi_router)


@app.exception_handler(ParseError)
async def parse_error_handler(request: Request, exc: ParseError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(ClusterUnavailable)
async def cluster_unavailable_handler(
    request: Request, exc: ClusterUnavailable
) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.exception_handler(ComputeFailure)
async def compute_failure_handler(request: Request, exc: ComputeFailure) -> JSONResponse:
    logging.getLogger("uvicorn.error").error(
        "Clustering failed: %s", exc, extra={"path": str(request.url.path)}
    )
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so map clients can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    reveal = (os.getenv("POI_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }

    if reveal or isinstance(exc, (RuntimeError, ValueError)):
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


@app.get("/health", response_model=HealthSchema)
def health(
    service: PoiQueryService = Depends(get_poi_query_service),
) -> HealthSchema:
    store = service.store
    if not store.ready:
        return HealthSchema(status="degraded", points=0, detail=store.load_error)
    return HealthSchema(status="ok", points=store.count())
