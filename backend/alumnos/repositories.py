"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (alumnos,
cursadas). Repositories return SQLModel objects and perform
commits/refreshes where appropriate; they never validate input.
"""

from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import func, update
from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from . import models


class AlumnoRepository:
    """CRUD operations for `Alumno` objects."""
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[models.Alumno]:
        """Return every alumno, in insertion order."""
        return self.session.exec(select(models.Alumno).order_by(models.Alumno.id)).all()

    def get(self, alumno_id: int) -> Optional[models.Alumno]:
        """Get an `Alumno` by primary key."""
        return self.session.get(models.Alumno, alumno_id)

    def get_with_cursadas(self, alumno_id: int) -> Optional[models.Alumno]:
        """Return an alumno with its cursadas eagerly loaded, or `None`."""
        stmt = (
            select(models.Alumno)
            .where(models.Alumno.id == alumno_id)
            .options(selectinload(models.Alumno.cursadas))
        )
        return self.session.exec(stmt).first()

    def create(self, alumno: models.Alumno) -> models.Alumno:
        """Persist a new alumno and return the managed instance."""
        self.session.add(alumno)
        self.session.commit()
        self.session.refresh(alumno)
        return alumno

    def bulk_create(self, alumnos: Iterable[models.Alumno]) -> None:
        """Insert several alumnos in a single commit."""
        self.session.add_all(list(alumnos))
        self.session.commit()

    def update_fields(self, alumno_id: int, fields: dict) -> int:
        """Apply `fields` to the alumno with `alumno_id`.

        Returns the number of matched rows (0 or 1). `updated_at` is
        refreshed even when `fields` is empty.
        """
        values = dict(fields)
        values["updated_at"] = datetime.now(timezone.utc)
        stmt = update(models.Alumno).where(models.Alumno.id == alumno_id).values(**values)
        result = self.session.exec(stmt)
        self.session.commit()
        return result.rowcount

    def delete(self, alumno: models.Alumno) -> None:
        """Remove an alumno; its cursadas are left untouched."""
        self.session.delete(alumno)
        self.session.commit()

    def count(self) -> int:
        """Return the number of alumno rows."""
        return self.session.exec(select(func.count()).select_from(models.Alumno)).one()


class CursadaRepository:
    """CRUD operations for `Cursada` objects."""
    def __init__(self, session: Session):
        self.session = session

    def get(self, cursada_id: int) -> Optional[models.Cursada]:
        """Fetch a cursada by id."""
        return self.session.get(models.Cursada, cursada_id)

    def create(self, cursada: models.Cursada) -> models.Cursada:
        """Persist a new cursada and return the managed instance."""
        self.session.add(cursada)
        self.session.commit()
        self.session.refresh(cursada)
        return cursada

    def bulk_create(self, cursadas: Iterable[models.Cursada]) -> None:
        """Insert several cursadas in a single commit."""
        self.session.add_all(list(cursadas))
        self.session.commit()

    def set_aprobada(self, cursada_id: int, aprobada: bool) -> int:
        """Set the approval flag and return the number of matched rows."""
        stmt = (
            update(models.Cursada)
            .where(models.Cursada.id == cursada_id)
            .values(aprobada=aprobada, updated_at=datetime.now(timezone.utc))
        )
        result = self.session.exec(stmt)
        self.session.commit()
        return result.rowcount

    def delete(self, cursada: models.Cursada) -> None:
        """Remove a single cursada."""
        self.session.delete(cursada)
        self.session.commit()

    def count(self) -> int:
        """Return the number of cursada rows."""
        return self.session.exec(select(func.count()).select_from(models.Cursada)).one()
