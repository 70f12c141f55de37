"""Store client for workouts and their sections.

Constructed once at startup from a session factory and handed to the routes
through a dependency. Every write runs in a single transaction, so a failure
in any step leaves neither a half-created workout nor a half-replaced section
set behind.
"""

import logging

from sqlalchemy import delete, func, select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from treinos_api.models.treino import SecaoTreino, Treino
from treinos_api.schemas.treino import SecaoTreinoCreate, SecaoTreinoRead, TreinoCreate, TreinoRead

logger = logging.getLogger(__name__)


def _add_secoes(session: AsyncSession, treino_id: int, secoes: list[SecaoTreinoCreate] | None) -> int:
    """Queue one row per section, in input order. Returns how many were added."""
    if not secoes:
        return 0
    session.add_all(
        [
            SecaoTreino(
                treino_id=treino_id,
                nome_secao=s.nome_secao,
                duracao_minutos=s.duracao_minutos,
                conteudo=s.conteudo,
                ordem=s.ordem,
            )
            for s in secoes
        ]
    )
    return len(secoes)


class TreinoStore:
    def __init__(self, session_maker: async_sessionmaker):
        self._session_maker = session_maker

    async def ping(self) -> None:
        async with self._session_maker() as session:
            await session.execute(text("SELECT 1"))

    async def list_treinos(self) -> list[TreinoRead]:
        async with self._session_maker() as session:
            r = await session.execute(select(Treino).order_by(Treino.data.desc(), Treino.id.desc()))
            return [TreinoRead.model_validate(row) for row in r.scalars().all()]

    async def get_treino(self, treino_id: int) -> TreinoRead | None:
        async with self._session_maker() as session:
            row = await session.get(Treino, treino_id)
            return TreinoRead.model_validate(row) if row else None

    async def create_treino(self, body: TreinoCreate) -> TreinoRead:
        async with self._session_maker() as session:
            async with session.begin():
                t = Treino(data=body.data, dia_semana=body.dia_semana, foco_tecnico=body.foco_tecnico)
                session.add(t)
                await session.flush()
                n = _add_secoes(session, t.id, body.secoes)
                await session.flush()
                await session.refresh(t)
                created = TreinoRead.model_validate(t)
        logger.info("Created treino %s with %d secoes", created.id, n)
        return created

    async def update_treino(self, treino_id: int, body: TreinoCreate) -> TreinoRead | None:
        """Replace the workout fields and its whole section set. None if the workout does not exist."""
        async with self._session_maker() as session:
            async with session.begin():
                t = await session.get(Treino, treino_id)
                if t is None:
                    return None
                t.data = body.data
                t.dia_semana = body.dia_semana
                t.foco_tecnico = body.foco_tecnico
                t.atualizado_em = func.now()
                await session.execute(delete(SecaoTreino).where(SecaoTreino.treino_id == treino_id))
                n = _add_secoes(session, treino_id, body.secoes)
                await session.flush()
                await session.refresh(t)
                updated = TreinoRead.model_validate(t)
        logger.info("Updated treino %s, replaced secoes with %d", treino_id, n)
        return updated

    async def delete_treino(self, treino_id: int) -> bool:
        """Delete the sections, then the workout. False if no workout row matched."""
        async with self._session_maker() as session:
            async with session.begin():
                await session.execute(delete(SecaoTreino).where(SecaoTreino.treino_id == treino_id))
                r = await session.execute(delete(Treino).where(Treino.id == treino_id))
                deleted = r.rowcount > 0
        if deleted:
            logger.info("Deleted treino %s", treino_id)
        return deleted

    async def list_secoes(self, treino_id: int) -> list[SecaoTreinoRead]:
        async with self._session_maker() as session:
            r = await session.execute(
                select(SecaoTreino)
                .where(SecaoTreino.treino_id == treino_id)
                .order_by(SecaoTreino.ordem, SecaoTreino.id)
            )
            return [SecaoTreinoRead.model_validate(row) for row in r.scalars().all()]
