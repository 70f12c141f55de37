"""Pydantic schemas for the treinos API."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class SecaoTreinoCreate(BaseModel):
    """One section of a workout as submitted by the client."""

    nome_secao: str = Field(min_length=1, max_length=255)
    duracao_minutos: int | None = Field(None, ge=0)
    conteudo: str | None = None
    ordem: int


class TreinoCreate(BaseModel):
    """Body for POST and PUT: the workout fields plus its full section list."""

    data: date
    dia_semana: str = Field(min_length=1, max_length=50)
    foco_tecnico: str
    secoes: list[SecaoTreinoCreate] | None = None


class TreinoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    data: date
    dia_semana: str
    foco_tecnico: str
    criado_em: datetime | None = None
    atualizado_em: datetime | None = None


class SecaoTreinoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    treino_id: int
    nome_secao: str
    duracao_minutos: int | None
    conteudo: str | None
    ordem: int
    criado_em: datetime | None = None
