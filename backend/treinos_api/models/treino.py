"""Training session (treinos) and its ordered sections (secoes_treino)."""

from datetime import date, datetime

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from treinos_api.db.base import Base


class Treino(Base):
    __tablename__ = "treinos"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    data: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    dia_semana: Mapped[str] = mapped_column(String(50), nullable=False)  # e.g. Segunda-feira
    foco_tecnico: Mapped[str] = mapped_column(Text, nullable=False)
    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    atualizado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    # No ORM cascade: sections are removed explicitly before the workout.
    secoes: Mapped[list["SecaoTreino"]] = relationship(
        "SecaoTreino", back_populates="treino", passive_deletes="all"
    )


class SecaoTreino(Base):
    __tablename__ = "secoes_treino"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    treino_id: Mapped[int] = mapped_column(ForeignKey("treinos.id"), nullable=False, index=True)
    nome_secao: Mapped[str] = mapped_column(String(255), nullable=False)
    duracao_minutos: Mapped[int | None] = mapped_column(Integer, nullable=True)
    conteudo: Mapped[str | None] = mapped_column(Text, nullable=True)
    ordem: Mapped[int] = mapped_column(Integer, nullable=False)  # display order, not unique
    criado_em: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    treino: Mapped["Treino"] = relationship("Treino", back_populates="secoes")
