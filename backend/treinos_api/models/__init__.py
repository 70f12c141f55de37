from treinos_api.models.treino import SecaoTreino, Treino

__all__ = [
    "Treino",
    "SecaoTreino",
]
