"""Informes legibles de una ejecución.

Por qué vive en adapters:
- Renderizar HTML es un detalle de infraestructura (Jinja2).
- El core solo conoce `SuiteRunResult`.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from core.services.suite_runner import SuiteRunResult

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

_OUTCOME_ORDER = {"failed": 0, "error": 1, "passed": 2, "skipped": 3}


def _get_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def render_run_html(*, result: SuiteRunResult, title: str = "account-probe run") -> str:
    """Renderiza un informe HTML autocontenido para una ejecución de la suite."""

    generated_at = datetime.now(timezone.utc).isoformat(timespec="seconds")
    outcomes = sorted(result.outcomes, key=lambda o: (_OUTCOME_ORDER.get(o.outcome, 9), o.nodeid))

    template = _get_env().get_template("report.html")
    return template.render(
        title=title,
        result=result,
        mode_label=result.mode.label(),
        generated_at=generated_at,
        outcomes=outcomes,
        passed=result.count("passed"),
        failed=result.count("failed"),
        errors=result.count("error"),
        skipped=result.count("skipped"),
        retried=len(result.retried),
    )


def export_run_html(*, result: SuiteRunResult, output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_run_html(result=result), encoding="utf-8")
    return output_path
