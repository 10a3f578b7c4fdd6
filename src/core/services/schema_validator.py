"""Aserciones estructurales sobre respuestas.

Superficial a propósito: comprobaciones de presencia e igualdad, no un
validador recursivo de tipos. La primera condición incumplida lanza; no hay
informe parcial.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.domain.models import ProbeResult, ResponseSchema
from core.errors import SchemaValidationError

_MISSING = object()

_TYPE_CHECKS = {
    "string": lambda v: isinstance(v, str),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "object": lambda v: isinstance(v, Mapping),
    "array": lambda v: isinstance(v, list),
    "null": lambda v: v is None,
}


def _status_and_body(response: ProbeResult | Mapping[str, Any]) -> tuple[Any, Any]:
    if isinstance(response, ProbeResult):
        return response.status_code, response.body

    if not isinstance(response, Mapping):
        raise SchemaValidationError(f"expected a response object, got {type(response).__name__}")

    status = response.get("status", response.get("status_code", _MISSING))
    if status is _MISSING:
        raise SchemaValidationError("expected response to have property 'status'")
    if "body" not in response:
        raise SchemaValidationError("expected response to have property 'body'")
    return status, response["body"]


def _require_object(body: Any) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise SchemaValidationError(
            f"expected response body to be an object, got {type(body).__name__}: {body!r}"
        )
    return body


def validate_response_schema(
    response: ProbeResult | Mapping[str, Any],
    expected_schema: ResponseSchema | Mapping[str, Any],
) -> None:
    """Asegura que `response` cumple `expected_schema`.

    `expected_schema` puede ser un `ResponseSchema` o un mapping plano como
    `{"status": 201, "requiredFields": ["userID"]}`.
    """

    schema = (
        expected_schema
        if isinstance(expected_schema, ResponseSchema)
        else ResponseSchema.model_validate(expected_schema)
    )
    status, body = _status_and_body(response)

    if schema.status is not None and status != schema.status:
        raise SchemaValidationError(f"expected status {schema.status}, got {status}")

    for prop in schema.properties or ():
        if prop not in _require_object(body):
            raise SchemaValidationError(f"expected response body to have property {prop!r}: {body!r}")

    for field in schema.required_fields or ():
        obj = _require_object(body)
        if field not in obj:
            raise SchemaValidationError(
                f"expected response body to have required field {field!r}: {body!r}"
            )
        if obj[field] is None:
            raise SchemaValidationError(f"expected required field {field!r} not to be null")


def validate_response_structure(payload: Any, expected_types: Mapping[str, str]) -> bool:
    """True si cada clave existe en `payload` con el tipo indicado.

    Tipos: string, number, boolean, object, array, null, any.
    """

    if not isinstance(payload, Mapping):
        return False

    for key, type_name in expected_types.items():
        if key not in payload:
            return False
        if type_name == "any":
            continue
        check = _TYPE_CHECKS.get(type_name)
        if check is None or not check(payload[key]):
            return False
    return True
