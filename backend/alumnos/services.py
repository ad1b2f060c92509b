"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories and
validation. Services are intentionally thin: they validate input, run
one or two repository calls and raise `ValidationFailed` or `NotFound`
for the controller to translate. Storage errors propagate unchanged.

Ids arrive as raw path segments; one that is not an integer cannot match
any row and is reported as `NotFound`.
"""

from typing import List, Optional

from sqlmodel import Session

from . import models, repositories
from .validation import validate_alumno, validate_alumno_changes, validate_cursada


MAX_ID = 2 ** 63 - 1


class NotFound(LookupError):
    """Raised when an operation targets an id with no matching row."""


def parse_id(raw) -> Optional[int]:
    """Return `raw` as an integer id, or `None` if it is not one."""
    if isinstance(raw, bool):
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    # larger values cannot be bound as SQLite integers
    return value if -MAX_ID <= value <= MAX_ID else None


class AlumnoService:
    """Alumno use cases (list, get, create, partial update, delete)."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.AlumnoRepository(session)

    def list_all(self) -> List[models.Alumno]:
        """Return every alumno, without cursadas."""
        return self.repo.list_all()

    def get(self, raw_id) -> models.Alumno:
        """Return the alumno with its cursadas loaded.

        Raises `NotFound` if no alumno has that id.
        """
        alumno_id = parse_id(raw_id)
        alumno = self.repo.get_with_cursadas(alumno_id) if alumno_id is not None else None
        if alumno is None:
            raise NotFound(f"No se encontró al Alumno con ID {raw_id}.")
        return alumno

    def create(self, payload) -> models.Alumno:
        """Validate `payload` and insert a new alumno.

        Nothing is written when validation fails.
        """
        fields = validate_alumno(payload)
        return self.repo.create(models.Alumno(**fields))

    def update(self, raw_id, payload) -> int:
        """Apply the fields present in `payload` to an existing alumno.

        The payload is validated before the id is looked at.
        """
        fields = validate_alumno_changes(payload)
        alumno_id = parse_id(raw_id)
        if alumno_id is None or self.repo.update_fields(alumno_id, fields) == 0:
            raise NotFound(f"No se encontró el Alumno con ID {raw_id}.")
        return alumno_id

    def delete(self, raw_id) -> None:
        """Delete an alumno. Its cursadas are not removed."""
        alumno_id = parse_id(raw_id)
        alumno = self.repo.get(alumno_id) if alumno_id is not None else None
        if alumno is None:
            raise NotFound("Alumno no encontrado")
        self.repo.delete(alumno)


class CursadaService:
    """Cursada use cases (create under an alumno, approve, reject, delete)."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.CursadaRepository(session)

    def create_for_alumno(self, raw_alumno_id, payload) -> models.Cursada:
        """Validate `payload` and insert it as a cursada of the alumno.

        The owning reference always comes from the path id; any value in
        the payload is ignored. The alumno is not required to exist, but
        an id that is not an integer raises `NotFound`.
        """
        fields = validate_cursada(payload)
        alumno_id = parse_id(raw_alumno_id)
        if alumno_id is None:
            raise NotFound(f"No se encontró al Alumno con ID {raw_alumno_id}.")
        cursada = models.Cursada(**fields)
        cursada.alumno_id = alumno_id
        return self.repo.create(cursada)

    def aprobar(self, raw_id) -> int:
        return self._set_aprobada(raw_id, True)

    def reprobar(self, raw_id) -> int:
        return self._set_aprobada(raw_id, False)

    def _set_aprobada(self, raw_id, aprobada: bool) -> int:
        cursada_id = parse_id(raw_id)
        if cursada_id is None or self.repo.set_aprobada(cursada_id, aprobada) == 0:
            raise NotFound(f"No se encontró la cursada con ID {raw_id}.")
        return cursada_id

    def delete(self, raw_id) -> None:
        cursada_id = parse_id(raw_id)
        cursada = self.repo.get(cursada_id) if cursada_id is not None else None
        if cursada is None:
            raise NotFound("Cursada no encontrada")
        self.repo.delete(cursada)
