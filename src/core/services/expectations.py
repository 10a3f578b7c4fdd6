"""Aserciones por lista de códigos permitidos y observaciones para escenarios.

Un 4xx del objetivo es un resultado normal: cada escenario lista los códigos
que acepta. Un 2xx ante un payload malicioso se documenta, no falla, porque la
suite no controla el objetivo.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from core.domain.models import ProbeResult

logger = logging.getLogger(__name__)

ERROR_FIELDS: tuple[str, ...] = ("message", "error", "code", "details")


def expect_status_in(
    result: ProbeResult,
    allowed: Iterable[int],
    *,
    scenario: str | None = None,
) -> int:
    """Asegura que el estado está en `allowed` y lo devuelve."""

    allowed_set = sorted(set(allowed))
    if result.status_code not in allowed_set:
        where = f" ({scenario})" if scenario else ""
        raise AssertionError(
            f"expected status to be one of {allowed_set}, got {result.status_code}{where}; "
            f"body: {result.body!r}"
        )
    return result.status_code


def note_unexpected_success(result: ProbeResult, *, scenario: str) -> bool:
    """Registra una observación de seguridad si se aceptó un payload inválido."""

    if not result.is_success:
        return False
    username = result.body.get("username") if isinstance(result.body, Mapping) else None
    logger.warning(
        "SECURITY OBSERVATION: %s accepted with status %s (username=%r)",
        scenario,
        result.status_code,
        username,
    )
    return True


def has_error_field(body: Any) -> bool:
    """True si el cuerpo trae alguno de los campos de error habituales."""

    return isinstance(body, Mapping) and any(field in body for field in ERROR_FIELDS)


def message_mentions(body: Any, keywords: Iterable[str]) -> bool:
    if not isinstance(body, Mapping):
        return False
    message = body.get("message")
    if not isinstance(message, str):
        return False
    lowered = message.lower()
    return any(keyword.lower() in lowered for keyword in keywords)
