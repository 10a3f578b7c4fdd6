"""Carga de ficheros JSON de fixtures (data-driven).

Soporta la forma:
- {"apiTestData": {"boundaryValues": {...}, "malformedRequests": [...]}}
"""

from __future__ import annotations

import json
from pathlib import Path

from adapters.fixtures.models import TestDataFile
from core.config import ProbeSettings
from core.resources_loader import get_default_fixture_path


def load_test_data(path: Path) -> TestDataFile:
    raw = path.read_text(encoding="utf-8")
    data = json.loads(raw)
    return TestDataFile.model_validate(data)


def load_default_test_data(settings: ProbeSettings | None = None) -> TestDataFile:
    """Carga el fixture configurado, o el primero que se encuentre en disco.

    Lanza FileNotFoundError si no hay ninguno.
    """

    path = settings.fixtures_path if settings and settings.fixtures_path else get_default_fixture_path()
    if path is None:
        raise FileNotFoundError("no test_data.json fixture found (set ACCOUNT_PROBE_FIXTURES_PATH)")
    return load_test_data(path)
