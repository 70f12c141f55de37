"""FastAPI dependencies: the store client created at startup."""

from fastapi import Request

from treinos_api.services.treino_store import TreinoStore


def get_store(request: Request) -> TreinoStore:
    return request.app.state.store
