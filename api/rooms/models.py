from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

# Blank codes are rejected after trimming
RoomCode = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]


class RoomCreate(BaseModel):
    codigo: RoomCode
    nombre: str = Field(..., min_length=1, max_length=150)
    edificio: str | None = Field(None, max_length=100)
    piso: int | None = None
    capacidad: int | None = Field(None, ge=0)
    tipo: str = Field("aula", min_length=1, max_length=50)


class RoomUpdate(BaseModel):
    codigo: RoomCode | None = None
    nombre: str | None = Field(None, min_length=1, max_length=150)
    edificio: str | None = Field(None, max_length=100)
    piso: int | None = None
    capacidad: int | None = Field(None, ge=0)
    tipo: str | None = Field(None, min_length=1, max_length=50)
    activa: bool | None = None


class RoomResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    codigo: str
    nombre: str
    edificio: str | None = None
    piso: int | None = None
    capacidad: int | None = None
    tipo: str
    activa: bool


class RoomCreatedResponse(BaseModel):
    success: bool = True
    aula: RoomResponse
