"""SQLModel data models.

This module defines the application's database tables using SQLModel.
An `Alumno` has many `Cursada` rows through the `alumno_id` foreign key.
"""

from typing import Optional
from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, date, timezone
from typing import List


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Alumno(SQLModel, table=True):
    """A student.

    Fields:
    - `nombre`: display name, never empty
    - `email`: contact address, validated before insert
    - `fecha_nacimiento`: birth date

    `created_at`/`updated_at` are bookkeeping columns and are never
    serialized in API responses.
    """
    __tablename__ = "alumnos"
    # AUTOINCREMENT: ids of deleted rows are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    nombre: str = Field(nullable=False)
    email: str = Field(nullable=False)
    fecha_nacimiento: date = Field(nullable=False)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    # passive deletes: removing an alumno never touches its cursadas
    cursadas: List['Cursada'] = Relationship(
        back_populates='alumno',
        sa_relationship_kwargs={"passive_deletes": "all"},
    )


class Cursada(SQLModel, table=True):
    """An enrollment of an `Alumno` in a subject for a given year and term.

    `aprobada` may be stored as null; the true default is applied by
    `CursadaIn`, so the column itself has no default.
    """
    __tablename__ = "cursadas"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    materia: str = Field(nullable=False)
    anio: int = Field(nullable=False)
    cuatrimestre: int = Field(nullable=False)
    aprobada: Optional[bool] = Field(default=None, nullable=True)
    alumno_id: int = Field(foreign_key='alumnos.id', index=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    alumno: Optional[Alumno] = Relationship(back_populates='cursadas')
