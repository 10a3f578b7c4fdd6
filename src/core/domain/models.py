"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Campos autodocumentados (Field) sin acoplar el core a librerías de HTTP o
  CLI.
- La API objetivo habla camelCase; los alias mantienen el código Python en
  snake_case y `model_dump(by_alias=True)` produce el cuerpo de la petición.

Nota:
- Estos modelos describen *qué* produce un sondeo, no *cómo* se obtiene.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic.config import ConfigDict


class UserProfile(BaseModel):
    """Datos de alta sintéticos para una invocación de test.

    Nunca se muta tras crearse ni se limpia en remoto. Los overrides no se
    validan: pueden traer None, tipos erróneos o claves extra.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )

    email: str = Field(..., description="Unique within a run (timestamp + random suffix).")
    password: str = Field(..., description="Satisfies the upper/lower/digit/special/8+ policy.")
    first_name: str
    last_name: str
    company_name: str
    phone: str

    @classmethod
    def field_name_for(cls, key: str) -> str:
        """Traduce un alias camelCase o un nombre de campo al nombre de campo."""

        for name, info in cls.model_fields.items():
            if key in (name, info.alias):
                return name
        return key


class ProbeResult(BaseModel):
    """Estado/headers/cuerpo capturados de una llamada HTTP."""

    model_config = ConfigDict(frozen=True)

    method: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    status_code: int = Field(..., description="As received; nonstandard codes are kept.")
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Response headers, keys lowercased.",
    )
    body: Any = Field(
        default=None,
        description="Decoded JSON when possible, raw text otherwise, None when empty.",
    )
    elapsed_ms: float = Field(default=0.0, ge=0.0)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_rate_limited(self) -> bool:
        return self.status_code in (429, 503)


class ResponseSchema(BaseModel):
    """Expectativa superficial sobre una respuesta: solo presencia e igualdad."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    status: int | None = Field(default=None, ge=100, le=599)
    properties: list[str] | None = None
    required_fields: list[str] | None = None

    @field_validator("properties", mode="before")
    @classmethod
    def _property_names(cls, value: Any) -> Any:
        # También acepta un objeto cuyas claves son los nombres de propiedad.
        if isinstance(value, Mapping):
            return list(value.keys())
        return value


class RateLimitBreakdown(BaseModel):
    """Clasificación, del lado del llamador, de una ráfaga de resultados."""

    total: int = 0
    successful: int = 0
    rate_limited: int = 0
    duplicates: int = 0
    validation_errors: int = 0
    other: int = 0

    @property
    def processed(self) -> int:
        """Peticiones que el objetivo realmente procesó (no limitadas)."""

        return self.total - self.rate_limited
