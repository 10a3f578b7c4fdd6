"""Localización de datos de fixtures.

Este módulo vive en `core/` porque:
- centraliza *qué* ficheros de datos necesita la suite, sin acoplarse a la CLI
  ni a pytest;
- los adapters que parsean los ficheros quedan libres de lógica de rutas.
"""

from __future__ import annotations

import os
from pathlib import Path

from core.config import get_user_config_dir

DEFAULT_FIXTURE_FILENAME = "test_data.json"


def _project_root() -> Path:
    # core/resources_loader.py -> core -> src -> <project_root>
    return Path(__file__).resolve().parents[2]


def get_default_fixture_path(filename: str = DEFAULT_FIXTURE_FILENAME) -> Path | None:
    """Busca un fichero de fixture en los sitios habituales.

    Orden:
    1) $ACCOUNT_PROBE_FIXTURES_DIR/<filename>
    2) <project_root>/fixtures/<filename>
    3) <user config dir>/fixtures/<filename>
    4) ./fixtures/<filename>, ./<filename> (cwd)
    """

    candidates: list[Path] = []
    override = (os.environ.get("ACCOUNT_PROBE_FIXTURES_DIR") or "").strip()
    if override:
        candidates.append(Path(override) / filename)

    candidates += [
        _project_root() / "fixtures" / filename,
        get_user_config_dir() / "fixtures" / filename,
        Path.cwd() / "fixtures" / filename,
        Path.cwd() / filename,
    ]
    for p in candidates:
        if p.exists() and p.is_file():
            return p
    return None
