"""Modelos para ficheros de fixtures (escenarios data-driven).

Idea:
- En vez de fijar cada caso límite/malformado en el módulo de tests, la suite
  los lee de `fixtures/test_data.json` y ejecuta un escenario genérico por
  entrada.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BoundaryCase(BaseModel):
    """Un cuerpo `{userName, password}` que ejercita un límite de entrada."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_name: Any = Field(default=None, alias="userName")
    password: Any = None

    def as_body(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class MalformedRequestCase(BaseModel):
    description: str = Field(..., min_length=1)
    data: dict[str, Any] = Field(default_factory=dict)


class ApiTestData(BaseModel):
    boundary_values: dict[str, BoundaryCase] = Field(default_factory=dict, alias="boundaryValues")
    malformed_requests: list[MalformedRequestCase] = Field(
        default_factory=list,
        alias="malformedRequests",
    )


class TestDataFile(BaseModel):
    """Raíz de `fixtures/test_data.json`."""

    __test__ = False

    api_test_data: ApiTestData = Field(default_factory=ApiTestData, alias="apiTestData")
