"""Componentes de UI para CLI (Rich).

Por qué componentes separados:
- Mantiene la lógica de comandos aparte del detalle de render.
- Tablas/paneles se comparten entre `request`, `rate-limit` y `run`.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ProbeResult, RateLimitBreakdown
from core.services.suite_runner import SuiteRunResult


def print_banner(console: Console) -> None:
    title = Text("account-probe", style="bold cyan")
    subtitle = Text("Sign-up / account API probing • Rate limits • Negative payloads", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _status_style(status: int) -> str:
    if 200 <= status < 300:
        return "green"
    if status in (429, 503):
        return "magenta"
    if 400 <= status < 500:
        return "yellow"
    return "red"


def _short_body(body: object, limit: int = 80) -> str:
    text = body if isinstance(body, str) else json.dumps(body, ensure_ascii=False, default=str)
    return text if len(text) <= limit else text[: limit - 3] + "..."


def build_results_table(results: Sequence[ProbeResult], *, title: str = "Probe results") -> Table:
    table = Table(title=title)
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Method", style="cyan", no_wrap=True)
    table.add_column("URL", style="white")
    table.add_column("Status", no_wrap=True)
    table.add_column("ms", justify="right", style="dim")
    table.add_column("Body", style="white")
    for i, r in enumerate(results, start=1):
        table.add_row(
            str(i),
            r.method,
            r.url,
            Text(str(r.status_code), style=_status_style(r.status_code)),
            f"{r.elapsed_ms:.0f}",
            _short_body(r.body),
        )
    return table


def build_breakdown_panel(breakdown: RateLimitBreakdown) -> Panel:
    body = Text()
    body.append(f"Successful: {breakdown.successful}\n", style="green")
    body.append(f"Rate limited: {breakdown.rate_limited}\n", style="magenta")
    body.append(f"Duplicates: {breakdown.duplicates}\n", style="yellow")
    body.append(f"Validation errors: {breakdown.validation_errors}\n", style="yellow")
    body.append(f"Other: {breakdown.other}\n", style="red")
    if breakdown.rate_limited:
        verdict = Text(f"Rate limiting active - {breakdown.rate_limited} requests rate limited", style="bold green")
    else:
        verdict = Text("No rate limiting detected", style="bold yellow")
    body.append_text(verdict)
    return Panel(body, title=f"{breakdown.total} requests", border_style="magenta")


def build_run_summary_table(result: SuiteRunResult) -> Table:
    table = Table(title=f"{result.mode.label()} ({result.attempts} attempt(s))")
    table.add_column("Outcome", style="bold")
    table.add_column("Count", justify="right")
    table.add_row(Text("passed", style="green"), str(result.count("passed")))
    table.add_row(Text("failed", style="red"), str(result.count("failed")))
    table.add_row(Text("errors", style="red"), str(result.count("error")))
    table.add_row(Text("skipped", style="yellow"), str(result.count("skipped")))
    table.add_row(Text("retried", style="dim"), str(len(result.retried)))
    return table
