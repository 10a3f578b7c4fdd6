"""Modos de ejecución del runner de la suite.

La CLI y el runner comparten esta única fuente de verdad sobre qué subconjunto
de specs se ejecuta, sin importarse entre sí.
"""

from __future__ import annotations

from enum import Enum


class RunMode(str, Enum):
    """Subconjuntos con nombre de la suite, seleccionados por marker de pytest."""

    ALL = "all"
    UI = "ui"
    API = "api"

    @classmethod
    def default(cls) -> "RunMode":
        """Modo usado cuando no se pide ninguno."""

        return cls.ALL

    def marker_expression(self) -> str | None:
        """Expresión `-m` de pytest para este modo (None ejecuta todo)."""

        if self is RunMode.ALL:
            return None
        return self.value

    def label(self) -> str:
        """Etiqueta legible para informes y logging."""

        return {
            RunMode.ALL: "All specs",
            RunMode.UI: "UI specs",
            RunMode.API: "API specs",
        }[self]
