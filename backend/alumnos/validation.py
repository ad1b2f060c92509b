"""Field rule evaluation for alumnos and cursadas.

Each function takes a raw mapping (usually a decoded JSON body) and
returns a normalized dict ready for the ORM, or raises `ValidationFailed`
with every violated rule, one message per field, in field declaration
order.
"""

from typing import Any, List, Mapping, Type

from pydantic import BaseModel, ValidationError

from .schemas import AlumnoCambios, AlumnoIn, CursadaIn


class ValidationFailed(ValueError):
    """Raised when a payload violates one or more field rules."""

    def __init__(self, errores: List[str]):
        super().__init__("; ".join(errores))
        self.errores = errores


# pydantic's own type errors, reworded per field kind
_TYPE_MESSAGES = {
    "date": 'El campo "{field}" debe ser una fecha válida',
    "int": 'El campo "{field}" debe ser un número entero',
    "bool": 'El campo "{field}" debe ser verdadero o falso',
    "string": 'El campo "{field}" debe ser un texto',
}


def _message(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    if error["type"] in ("not_null", "not_empty", "not_text", "not_email", "out_of_range", "not_in"):
        return error["msg"]
    kind = error["type"].split("_", 1)[0]
    template = _TYPE_MESSAGES.get(kind, 'El campo "{field}" tiene un valor inválido')
    return template.format(field=field)


def _run(schema: Type[BaseModel], data: Any, **dump_kwargs) -> dict:
    if not isinstance(data, Mapping):
        data = {}
    try:
        parsed = schema.model_validate(dict(data))
    except ValidationError as exc:
        raise ValidationFailed([_message(e) for e in exc.errors()])
    return parsed.model_dump(**dump_kwargs)


def validate_alumno(data: Any) -> dict:
    """Validate a full alumno payload for creation."""
    return _run(AlumnoIn, data)


def validate_alumno_changes(data: Any) -> dict:
    """Validate only the alumno fields present in `data`."""
    return _run(AlumnoCambios, data, exclude_unset=True)


def validate_cursada(data: Any) -> dict:
    """Validate a cursada payload; `aprobada` defaults to true."""
    return _run(CursadaIn, data)
