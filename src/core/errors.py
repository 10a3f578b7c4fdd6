"""Tipos de error del toolkit de sondeo.

Un 4xx/5xx del objetivo no es un error aquí: se devuelve como `ProbeResult` y
el llamador lo contrasta con una lista de códigos permitidos.
"""

from __future__ import annotations


class ProbeError(Exception):
    """Clase base de los errores del toolkit."""


class TransportError(ProbeError):
    """La petición nunca produjo respuesta HTTP (DNS, conexión, timeout)."""

    def __init__(self, message: str, *, method: str, url: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url

    def __str__(self) -> str:
        return f"{self.method} {self.url}: {self.args[0]}"


class UnknownPayloadTagError(ProbeError, KeyError):
    """Consulta estricta de un tag de payload que no está en el catálogo."""

    def __init__(self, tag: str, known: tuple[str, ...]) -> None:
        super().__init__(tag)
        self.tag = tag
        self.known = known

    def __str__(self) -> str:
        return f"unknown payload tag {self.tag!r} (known: {', '.join(self.known)})"


class SchemaValidationError(AssertionError):
    """Una respuesta no cumple el estado/forma de cuerpo esperados."""
