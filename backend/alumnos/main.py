"""FastAPI application entrypoint and HTTP controllers.

This module defines the HTTP endpoints of the alumnos backend.
Controllers are intentionally thin: they accept requests, delegate to
services, and translate service outcomes into JSON responses.

Endpoints implemented:
- GET /Alumnos
- GET /Alumnos/{id}
- POST /Alumnos/
- PATCH /Alumnos/{id}
- DELETE /Alumnos/{id}
- POST /Alumnos/{id}/Cursada
- PATCH /Cursada/Aprobar/{id}
- PATCH /Cursada/Reprobar/{id}
- DELETE /Cursada/{id}
- GET /health

Run locally with `uvicorn alumnos.main:app --port 3000` from `backend/`.
"""

from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Depends, Body, Request
from fastapi.responses import JSONResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session
import json
import logging
import time
import uuid
from . import database, schemas, services
from .config import settings
from .seed import seed_defaults
from .validation import ValidationFailed

logger = logging.getLogger("alumnos.api")
if not logging.getLogger().handlers:
    logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Initialise the store, create tables and seed before serving."""
    database.init_engine(settings.DATABASE_URL, echo=settings.SQL_ECHO)
    database.create_db_and_tables()
    if settings.SEED_ON_STARTUP:
        with Session(database.get_engine()) as session:
            seed_defaults(session)
    logger.info("alumnos api ready (env=%s)", settings.ENV)
    try:
        yield
    finally:
        database.dispose_engine()


app = FastAPI(title="Alumnos API", lifespan=lifespan)

# Wide-open CORS keeps local HTML testers working without extra config in dev.
if settings.ALLOW_DEV_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def request_context_middleware(request: Request, call_next):
    req_id = request.headers.get("X-Request-ID", uuid.uuid4().hex)
    request.state.request_id = req_id
    started = time.perf_counter()
    response: Response
    try:
        response = await call_next(request)
    except Exception:
        elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
        logger.exception(
            "request_failed %s",
            json.dumps(
                {
                    "request_id": req_id,
                    "path": request.url.path,
                    "method": request.method,
                    "duration_ms": elapsed_ms,
                },
                ensure_ascii=True,
            ),
        )
        raise
    response.headers["X-Request-ID"] = req_id
    elapsed_ms = round((time.perf_counter() - started) * 1000.0, 2)
    logger.info(
        "request_done %s",
        json.dumps(
            {
                "request_id": req_id,
                "path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "duration_ms": elapsed_ms,
            },
            ensure_ascii=True,
        ),
    )
    return response


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _rejected(exc: ValidationFailed) -> JSONResponse:
    # validation failures on create are reported as 409, never 400
    logger.info("payload rejected: %s", exc.errores)
    return JSONResponse(status_code=409, content={"errores": exc.errores})


@app.get('/Alumnos')
def list_alumnos(db: Session = Depends(database.get_session)):
    """List every alumno without its cursadas."""
    alumnos = services.AlumnoService(db).list_all()
    return [schemas.AlumnoOut.model_validate(a).model_dump(mode="json") for a in alumnos]


@app.get('/Alumnos/{alumno_id}')
def get_alumno(alumno_id: str, db: Session = Depends(database.get_session)):
    """Return one alumno together with its cursadas."""
    try:
        alumno = services.AlumnoService(db).get(alumno_id)
        body = schemas.AlumnoDetalleOut.model_validate(alumno).model_dump(mode="json", by_alias=True)
    except services.NotFound as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("get alumno %s failed", alumno_id)
        return _error(500, "Ha ocurrido un error al ejecutar la consulta.")
    return body


@app.post('/Alumnos/')
def create_alumno(payload: Any = Body(default=None), db: Session = Depends(database.get_session)):
    """Create an alumno; rule violations come back as 409 `errores`."""
    try:
        alumno = services.AlumnoService(db).create(payload)
    except ValidationFailed as e:
        return _rejected(e)
    except SQLAlchemyError:
        logger.exception("create alumno failed")
        return _error(500, "Ha ocurrido un error al guardar los datos.")
    return {'id': alumno.id}


@app.patch('/Alumnos/{alumno_id}')
def update_alumno(alumno_id: str, payload: Any = Body(default=None), db: Session = Depends(database.get_session)):
    """Partially update an alumno.

    Invalid fields are reported like storage failures (500), unlike the
    409 used on creation.
    """
    try:
        updated_id = services.AlumnoService(db).update(alumno_id, payload)
    except services.NotFound as e:
        return _error(404, str(e))
    except (ValidationFailed, SQLAlchemyError):
        logger.exception("update alumno %s failed", alumno_id)
        return _error(500, "Ha ocurrido un error al actualizar los datos.")
    return {'id': updated_id}


@app.delete('/Alumnos/{alumno_id}')
def delete_alumno(alumno_id: str, db: Session = Depends(database.get_session)):
    """Delete an alumno. Its cursadas stay in the store."""
    try:
        services.AlumnoService(db).delete(alumno_id)
    except services.NotFound as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("delete alumno %s failed", alumno_id)
        return _error(500, "Internal server error")
    return "ok"


@app.post('/Alumnos/{alumno_id}/Cursada')
def create_cursada(alumno_id: str, payload: Any = Body(default=None), db: Session = Depends(database.get_session)):
    """Create a cursada owned by the alumno in the path."""
    try:
        cursada = services.CursadaService(db).create_for_alumno(alumno_id, payload)
    except ValidationFailed as e:
        return _rejected(e)
    except services.NotFound as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("create cursada for alumno %s failed", alumno_id)
        return _error(500, "Ha ocurrido un error al guardar los datos.")
    return {'id': cursada.id}


@app.patch('/Cursada/Aprobar/{cursada_id}')
def aprobar_cursada(cursada_id: str, db: Session = Depends(database.get_session)):
    """Mark a cursada as approved (idempotent)."""
    try:
        updated_id = services.CursadaService(db).aprobar(cursada_id)
    except services.NotFound as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("approve cursada %s failed", cursada_id)
        return _error(500, "Ha ocurrido un error al actualizar los datos.")
    return {'id': updated_id}


@app.patch('/Cursada/Reprobar/{cursada_id}')
def reprobar_cursada(cursada_id: str, db: Session = Depends(database.get_session)):
    """Mark a cursada as rejected (idempotent)."""
    try:
        updated_id = services.CursadaService(db).reprobar(cursada_id)
    except services.NotFound as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("reject cursada %s failed", cursada_id)
        return _error(500, "Ha ocurrido un error al actualizar los datos.")
    return {'id': updated_id}


@app.delete('/Cursada/{cursada_id}')
def delete_cursada(cursada_id: str, db: Session = Depends(database.get_session)):
    try:
        services.CursadaService(db).delete(cursada_id)
    except services.NotFound as e:
        return _error(404, str(e))
    except SQLAlchemyError:
        logger.exception("delete cursada %s failed", cursada_id)
        return _error(500, "Internal server error")
    return "ok"


@app.get("/health")
def health():
    """Lightweight health check for uptime monitoring."""
    return {"status": "ok"}
