"""Contrato para cualquier cosa capaz de emitir una petición de sondeo.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia.
- `ProbeClient` lo cumple; también cualquier doble de test con la misma
  corrutina `request`.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.models import ProbeResult


@runtime_checkable
class ProbeRequester(Protocol):
    """Contrato mínimo para emitir una petición.

    Reglas de diseño:
    - `request` es async porque hace I/O de red.
    - Devuelve un `ProbeResult` para cualquier estado HTTP; solo los fallos de
      transporte lanzan.
    """

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str | None] | None = None,
        params: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ProbeResult:
        """Emite `method path` y devuelve el resultado capturado."""

        ...
