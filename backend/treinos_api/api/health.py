"""Liveness and readiness probes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from treinos_api.api.deps import get_store
from treinos_api.services.treino_store import TreinoStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", summary="Liveness check")
async def health() -> dict:
    """Never touches the store."""
    return {"status": "OK", "message": "Backend is running"}


@router.get(
    "/ready",
    summary="Readiness check",
    responses={503: {"description": "Store unreachable"}},
)
async def ready(store: Annotated[TreinoStore, Depends(get_store)]) -> JSONResponse:
    try:
        await store.ping()
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "database": "unreachable"},
        )
    return JSONResponse({"status": "OK", "database": "reachable"})
