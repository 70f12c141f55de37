"""Treinos API: CRUD for workouts and listing of their ordered sections."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from treinos_api.api.deps import get_store
from treinos_api.schemas.treino import SecaoTreinoRead, TreinoCreate, TreinoRead
from treinos_api.services.treino_store import TreinoStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/treinos", tags=["treinos"])

NOT_FOUND = "Treino not found"

StoreDep = Annotated[TreinoStore, Depends(get_store)]


@router.get("", response_model=list[TreinoRead], summary="List workouts")
async def list_treinos(store: StoreDep) -> list[TreinoRead]:
    """All workouts, most recent first."""
    try:
        return await store.list_treinos()
    except Exception:
        logger.exception("Error fetching treinos")
        raise HTTPException(status_code=500, detail="Failed to fetch treinos")


@router.get(
    "/{treino_id}",
    response_model=TreinoRead,
    summary="Get workout",
    responses={404: {"description": NOT_FOUND}},
)
async def get_treino(store: StoreDep, treino_id: int) -> TreinoRead:
    try:
        t = await store.get_treino(treino_id)
    except Exception:
        logger.exception("Error fetching treino %s", treino_id)
        raise HTTPException(status_code=500, detail="Failed to fetch treino")
    if t is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return t


@router.post("", response_model=TreinoRead, status_code=201, summary="Create workout")
async def create_treino(store: StoreDep, body: TreinoCreate) -> TreinoRead:
    """Create the workout and its sections; the sections are not echoed back."""
    try:
        return await store.create_treino(body)
    except Exception:
        logger.exception("Error creating treino")
        raise HTTPException(status_code=500, detail="Failed to create treino")


@router.put(
    "/{treino_id}",
    response_model=TreinoRead,
    summary="Update workout",
    responses={404: {"description": NOT_FOUND}},
)
async def update_treino(store: StoreDep, treino_id: int, body: TreinoCreate) -> TreinoRead:
    """Replace the workout fields; the previous sections are replaced, never merged."""
    try:
        t = await store.update_treino(treino_id, body)
    except Exception:
        logger.exception("Error updating treino %s", treino_id)
        raise HTTPException(status_code=500, detail="Failed to update treino")
    if t is None:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return t


@router.delete(
    "/{treino_id}",
    summary="Delete workout",
    responses={404: {"description": NOT_FOUND}},
)
async def delete_treino(store: StoreDep, treino_id: int) -> dict:
    try:
        deleted = await store.delete_treino(treino_id)
    except Exception:
        logger.exception("Error deleting treino %s", treino_id)
        raise HTTPException(status_code=500, detail="Failed to delete treino")
    if not deleted:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    return {"message": "Treino deleted successfully"}


@router.get("/{treino_id}/secoes", response_model=list[SecaoTreinoRead], summary="List sections")
async def list_secoes(store: StoreDep, treino_id: int) -> list[SecaoTreinoRead]:
    """Sections ordered by `ordem`; empty when the workout has none or does not exist."""
    try:
        return await store.list_secoes(treino_id)
    except Exception:
        logger.exception("Error fetching sections for treino %s", treino_id)
        raise HTTPException(status_code=500, detail="Failed to fetch sections")
