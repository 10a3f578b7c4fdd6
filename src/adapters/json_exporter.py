"""Exportación JSON de resultados de sondeo y de ejecuciones de la suite.

Por qué JSON:
- Interopera con dashboards de CI y scripts ad-hoc.
- Conserva la evidencia de una ejecución sin depender del render HTML.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from core.domain.models import ProbeResult
from core.services.rate_limit import classify_responses
from core.services.suite_runner import SuiteRunResult


def _write_json(payload: object, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path


def export_results_json(*, results: Sequence[ProbeResult], output_path: Path) -> Path:
    """Exporta resultados de sondeo (en orden de llamada) y su desglose por estado."""

    payload = {
        "results": [r.model_dump(mode="json") for r in results],
        "breakdown": classify_responses(results).model_dump(mode="json"),
    }
    return _write_json(payload, output_path)


def export_run_json(*, result: SuiteRunResult, output_path: Path) -> Path:
    return _write_json(result.to_dict(), output_path)
