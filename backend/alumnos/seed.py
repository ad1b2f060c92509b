"""Default data for a fresh database.

`seed_defaults` inserts four alumnos and one cursada for each of them,
but only when both tables are empty. It is best effort: any failure is
logged and swallowed so startup always continues.
"""

import logging
from datetime import date

from sqlmodel import Session

from . import models, repositories
from .validation import validate_alumno, validate_cursada

logger = logging.getLogger("alumnos.seed")

ALUMNOS = [
    {"nombre": "Jimi Hendrix", "email": "Jimi@Hendrix.com", "fecha_nacimiento": date(1942, 11, 27)},
    {"nombre": "Carlos Tevez", "email": "carlos@tevez.com", "fecha_nacimiento": date(1984, 2, 5)},
    {"nombre": "Post Malone", "email": "post@malone.com", "fecha_nacimiento": date(1995, 7, 4)},
    {"nombre": "Jimmy Kimmel", "email": "Jimmi@kimmel.com", "fecha_nacimiento": date(1967, 11, 13)},
]

# alumno_id relies on the alumnos above receiving ids 1..4 in an empty table
CURSADAS = [
    {"materia": "Historia", "anio": 1953, "cuatrimestre": 2, "aprobada": True, "alumno_id": 1},
    {"materia": "Matematica", "anio": 2001, "cuatrimestre": 1, "aprobada": False, "alumno_id": 2},
    {"materia": "Lengua", "anio": 2009, "cuatrimestre": 1, "aprobada": True, "alumno_id": 3},
    {"materia": "Ingles", "anio": 1998, "cuatrimestre": 2, "aprobada": False, "alumno_id": 4},
]


def seed_defaults(session: Session) -> bool:
    """Populate default rows when both tables are empty.

    Returns True when rows were inserted, False when the store already had
    data or seeding failed.
    """
    alumno_repo = repositories.AlumnoRepository(session)
    cursada_repo = repositories.CursadaRepository(session)
    try:
        if alumno_repo.count() or cursada_repo.count():
            logger.info("seed skipped: store already has data")
            return False
        alumnos = [models.Alumno(**validate_alumno(a)) for a in ALUMNOS]
        cursadas = []
        for c in CURSADAS:
            cursada = models.Cursada(**validate_cursada(c))
            cursada.alumno_id = c["alumno_id"]
            cursadas.append(cursada)
        alumno_repo.bulk_create(alumnos)
        cursada_repo.bulk_create(cursadas)
    except Exception:
        session.rollback()
        logger.exception("seed failed")
        return False
    logger.info("seeded %d alumnos and %d cursadas", len(alumnos), len(cursadas))
    return True
