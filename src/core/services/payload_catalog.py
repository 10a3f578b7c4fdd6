"""Cuerpos de petición inválidos, con nombre, para pruebas negativas.

Cada plantilla rompe exactamente una regla de validación de la API de cuentas,
así un escenario se define una vez y se reutiliza por tag. Las consultas
entregan copias profundas; el catálogo en sí es de solo lectura.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterator
from types import MappingProxyType
from typing import Any

from core.config import ProbeSettings
from core.errors import UnknownPayloadTagError

logger = logging.getLogger(__name__)

FALLBACK_TAG = "emptyObject"

_TEMPLATES: MappingProxyType[str, dict[str, Any]] = MappingProxyType(
    {
        "emptyObject": {},
        "nullValues": {"userName": None, "password": None},
        "invalidTypes": {"userName": 12345, "password": True},
        "missingUserName": {"password": "ValidPassword123!"},
        "missingPassword": {"userName": "validUser"},
        "emptyStrings": {"userName": "", "password": ""},
        "tooLong": {"userName": "a" * 1000, "password": "b" * 1000},
        "specialChars": {
            "userName": '<script>alert("xss")</script>',
            "password": "DROP TABLE users;",
        },
    }
)

PAYLOAD_TAGS: tuple[str, ...] = tuple(_TEMPLATES)


def get_malformed_payload(tag: str, *, strict: bool = False) -> dict[str, Any]:
    """Devuelve una copia de la plantilla registrada bajo `tag`.

    Un tag desconocido cae a `emptyObject` (con warning) para que una errata no
    bloquee la ejecución; con `strict=True` lanza `UnknownPayloadTagError`.
    """

    template = _TEMPLATES.get(tag)
    if template is None:
        if strict:
            raise UnknownPayloadTagError(tag, PAYLOAD_TAGS)
        logger.warning("Unknown payload tag %r, falling back to %r", tag, FALLBACK_TAG)
        template = _TEMPLATES[FALLBACK_TAG]
    return copy.deepcopy(template)


def payload_for(tag: str, settings: ProbeSettings) -> dict[str, Any]:
    """Consulta que respeta la política `strict_payload_tags` configurada."""

    return get_malformed_payload(tag, strict=settings.strict_payload_tags)


def iter_malformed_payloads() -> Iterator[tuple[str, dict[str, Any]]]:
    for tag in PAYLOAD_TAGS:
        yield tag, copy.deepcopy(_TEMPLATES[tag])
