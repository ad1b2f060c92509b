"""Pydantic request/response schemas used by the API.

Input schemas carry the field rules for alumnos and cursadas. Every
validator raises `PydanticCustomError` so the message a client sees is
exactly the one written here; `alumnos.validation` collects them.
Output schemas mirror the table columns minus the bookkeeping timestamps.
"""

from datetime import date, datetime
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

RANGOS = {
    "anio": (1, 2100),
    "cuatrimestre": (1, 2),
}

_APROBADA_VALORES = {
    "1": True,
    "true": True,
    "0": False,
    "false": False,
}

# full timestamps such as Date.toJSON() output: "1990-05-10T12:30:00.000Z"
_DATETIME = TypeAdapter(datetime)

APROBADA_MSG = (
    'El campo "aprobada" debe ser una de las siguientes opciones: '
    '1 / true (=verdadero) ó 0 / false (=falso)'
)


def _check_required(value, field: str):
    """Raise for null or blank values of a required field."""
    if value is None:
        raise PydanticCustomError("not_null", 'El campo "{field}" no puede ser nulo', {"field": field})
    if isinstance(value, str) and not value.strip():
        raise PydanticCustomError("not_empty", 'El campo "{field}" no puede estar vacío', {"field": field})


def _required_text(value, field: str) -> str:
    _check_required(value, field)
    if not isinstance(value, str):
        raise PydanticCustomError("not_text", 'El campo "{field}" debe ser un texto', {"field": field})
    return value


class AlumnoCambios(BaseModel):
    """Partial alumno payload; only the fields sent are validated."""
    model_config = ConfigDict(extra="ignore")

    nombre: Optional[str] = None
    email: Optional[str] = None
    fecha_nacimiento: Optional[date] = None

    @field_validator("nombre", mode="before")
    @classmethod
    def _nombre(cls, value):
        return _required_text(value, "nombre")

    @field_validator("email", mode="before")
    @classmethod
    def _email(cls, value):
        if value is None:
            raise PydanticCustomError("not_null", 'El campo "email" no puede ser nulo')
        if not isinstance(value, str):
            raise PydanticCustomError("not_email", 'El campo "email" debe ser una dirección de correo válida')
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("not_email", 'El campo "email" debe ser una dirección de correo válida')
        return value

    @field_validator("fecha_nacimiento", mode="before")
    @classmethod
    def _fecha_nacimiento(cls, value):
        _check_required(value, "fecha_nacimiento")
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value.strip()) > 10:
            try:
                return _DATETIME.validate_python(value.strip()).date()
            except ValidationError:
                return value
        return value


class AlumnoIn(AlumnoCambios):
    """Full alumno payload for creation; missing fields are violations."""
    nombre: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    fecha_nacimiento: Optional[date] = Field(default=None, validate_default=True)


class CursadaIn(BaseModel):
    """Cursada payload for creation.

    The owning `alumno_id` is deliberately absent: it always comes from
    the URL path and is assigned after validation.
    """
    model_config = ConfigDict(extra="ignore")

    materia: Optional[str] = Field(default=None, validate_default=True)
    anio: Optional[int] = Field(default=None, validate_default=True)
    cuatrimestre: Optional[int] = Field(default=None, validate_default=True)
    aprobada: Optional[bool] = True

    @field_validator("materia", mode="before")
    @classmethod
    def _materia(cls, value):
        return _required_text(value, "materia")

    @field_validator("anio", "cuatrimestre", mode="before")
    @classmethod
    def _entero_requerido(cls, value, info: ValidationInfo):
        _check_required(value, info.field_name)
        return value

    @field_validator("anio", "cuatrimestre")
    @classmethod
    def _en_rango(cls, value: int, info: ValidationInfo):
        lo, hi = RANGOS[info.field_name]
        if not lo <= value <= hi:
            raise PydanticCustomError(
                "out_of_range",
                'El campo "{field}" debe estar entre {min} y {max}',
                {"field": info.field_name, "min": lo, "max": hi},
            )
        return value

    @field_validator("aprobada", mode="before")
    @classmethod
    def _aprobada(cls, value):
        if value is None:
            return None
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str) and value.strip().lower() in _APROBADA_VALORES:
            return _APROBADA_VALORES[value.strip().lower()]
        raise PydanticCustomError("not_in", APROBADA_MSG)


class CursadaOut(BaseModel):
    """Cursada as returned by the API (owning reference as `alumnoId`)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    materia: str
    anio: int
    cuatrimestre: int
    aprobada: Optional[bool]
    alumno_id: int = Field(serialization_alias="alumnoId")


class AlumnoOut(BaseModel):
    """Alumno as returned by the list endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    nombre: str
    email: str
    fecha_nacimiento: date


class AlumnoDetalleOut(AlumnoOut):
    """Alumno with its eagerly loaded cursadas."""
    cursadas: List[CursadaOut] = []
