"""Interfaz de línea de comandos (Typer).

Comandos:
- `run`: ejecuta el subconjunto de tests de un modo (all / ui / api) y,
  opcionalmente, escribe un informe HTML + JSON.
- `request`, `rate-limit`: sondeos ad-hoc contra la API configurada.
- `payloads`, `generate`: inspeccionan el catálogo de payloads y los generadores.
- `doctor`: diagnóstico del entorno.
"""

from __future__ import annotations

import asyncio
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from adapters.http_client import ProbeClient
from adapters.json_exporter import export_results_json, export_run_json
from adapters.report_exporter import export_run_html
from cli import doctor
from cli.ui_components import (
    build_breakdown_panel,
    build_results_table,
    build_run_summary_table,
    print_banner,
)
from core.config import ProbeSettings
from core.domain.models import ProbeResult
from core.domain.run_mode import RunMode
from core.errors import TransportError, UnknownPayloadTagError
from core.services.payload_catalog import get_malformed_payload, iter_malformed_payloads
from core.services.rate_limit import classify_responses, run_rate_limit_probe
from core.services.suite_runner import SuiteRunRequest, run_suite
from core.services.test_data import (
    generate_api_user_data,
    generate_secure_password,
    generate_unique_email,
    generate_user_data,
)

app = typer.Typer(
    no_args_is_help=True,
    help="Probe a user-account API: generated data, negative payloads, rate limits.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


class DataKind(str, Enum):
    USER = "user"
    API_USER = "api-user"
    EMAIL = "email"
    PASSWORD = "password"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)],
        force=True,
    )
    # Las líneas por petición de httpx no entran en el log del sondeo.
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _parse_headers(values: list[str] | None) -> dict[str, str]:
    headers: dict[str, str] = {}
    for raw in values or []:
        if ":" not in raw:
            raise typer.BadParameter(f"header must look like 'Name: value', got {raw!r}")
        name, value = raw.split(":", 1)
        headers[name.strip()] = value.strip()
    return headers


def _parse_assignments(values: list[str] | None) -> dict[str, Any]:
    """Pares `key=value`; el valor es JSON si parsea, string si no."""

    out: dict[str, Any] = {}
    for raw in values or []:
        if "=" not in raw:
            raise typer.BadParameter(f"expected key=value, got {raw!r}")
        key, value = raw.split("=", 1)
        try:
            out[key.strip()] = json.loads(value)
        except json.JSONDecodeError:
            out[key.strip()] = value
    return out


def _fail_transport(exc: TransportError) -> None:
    _console.print(f"[red]Transport error:[/red] {exc}")
    raise typer.Exit(code=2)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log request/response bodies."),
) -> None:
    _configure_logging(verbose)


@app.command("run")
def run_specs(
    mode: RunMode = typer.Option(RunMode.default(), "--mode", "-m", case_sensitive=False, help="Spec subset."),
    report: bool = typer.Option(False, "--report/--no-report", help="Write HTML + JSON reports."),
    live: bool = typer.Option(False, "--live", help="Hit the real API instead of the in-process fake."),
    retries: int | None = typer.Option(None, "--retries", min=0, help="Re-runs of failed tests (default: config)."),
    reports_dir: Path | None = typer.Option(None, "--reports-dir", help="Where JUnit XML and reports go."),
    tests: str = typer.Option("tests", "--tests", help="Test path passed to pytest."),
) -> None:
    """Run the tests for a mode and summarize the outcome."""

    settings = ProbeSettings()
    request = SuiteRunRequest(
        mode=mode,
        live=live,
        retries=settings.retry_attempts if retries is None else retries,
        reports_dir=reports_dir or settings.reports_dir,
        test_path=tests,
    )
    print_banner(_console)
    result = run_suite(request)
    _console.print(build_run_summary_table(result))

    if report:
        html_path = export_run_html(result=result, output_path=request.reports_dir / f"report-{mode.value}.html")
        json_path = export_run_json(result=result, output_path=request.reports_dir / f"report-{mode.value}.json")
        _console.print(f"[green]Report:[/green] {html_path}")
        _console.print(f"[green]JSON:[/green] {json_path}")

    if result.no_tests_selected:
        _console.print(f"[yellow]No specs matched mode {mode.value!r}.[/yellow]")
        raise typer.Exit(code=0)
    raise typer.Exit(code=result.exit_code)


async def _send_one(
    settings: ProbeSettings,
    method: str,
    path: str,
    *,
    body: Any,
    content: str | None,
    headers: dict[str, str],
) -> ProbeResult:
    async with ProbeClient(settings) as client:
        return await client.request(method, path, body=body, content=content, headers=headers)


@app.command("request")
def request_command(
    method: str = typer.Argument(..., help="HTTP method."),
    path: str = typer.Argument(..., help="Path appended to the API base URL."),
    body: str | None = typer.Option(None, "--body", "-b", help="JSON request body."),
    raw: bool = typer.Option(False, "--raw", help="Send --body as-is (no JSON parsing)."),
    header: list[str] | None = typer.Option(None, "--header", "-H", help="Extra header 'Name: value'."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the result as JSON."),
) -> None:
    """Send one request and show the captured result (never fails on status)."""

    settings = ProbeSettings()
    parsed_body: Any = None
    content: str | None = None
    if body is not None:
        if raw:
            content = body
        else:
            try:
                parsed_body = json.loads(body)
            except json.JSONDecodeError as exc:
                raise typer.BadParameter(f"--body is not valid JSON: {exc}") from exc

    try:
        result = asyncio.run(
            _send_one(settings, method, path, body=parsed_body, content=content, headers=_parse_headers(header))
        )
    except TransportError as exc:
        _fail_transport(exc)
        return

    _console.print(build_results_table([result]))
    if output:
        export_results_json(results=[result], output_path=output)
        _console.print(f"[green]Saved:[/green] {output}")


@app.command("rate-limit")
def rate_limit_command(
    endpoint: str = typer.Argument("/Account/v1/User", help="Endpoint to hammer."),
    count: int = typer.Option(10, "--count", "-n", min=1, help="Number of requests."),
    window_ms: int = typer.Option(1000, "--window-ms", min=1, help="Informational time window."),
    method: str = typer.Option("POST", "--method", "-X"),
    concurrent: bool | None = typer.Option(None, "--concurrent/--sequential", help="Default: config."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write results as JSON."),
) -> None:
    """Fire a burst of requests and classify the responses."""

    settings = ProbeSettings()
    use_concurrency = settings.rate_limit_concurrent if concurrent is None else concurrent

    async def _burst() -> list[ProbeResult]:
        async with ProbeClient(settings) as client:
            return await run_rate_limit_probe(
                client,
                endpoint,
                count,
                window_ms,
                method,
                concurrent=use_concurrency,
                max_concurrency=settings.rate_limit_max_concurrency,
            )

    try:
        results = asyncio.run(_burst())
    except TransportError as exc:
        _fail_transport(exc)
        return

    _console.print(build_results_table(results, title="Rate limit burst"))
    _console.print(build_breakdown_panel(classify_responses(results)))
    if output:
        export_results_json(results=results, output_path=output)
        _console.print(f"[green]Saved:[/green] {output}")


@app.command("payloads")
def payloads_command(
    tag: str | None = typer.Argument(None, help="Show one template."),
    strict: bool = typer.Option(False, "--strict", help="Fail on unknown tags instead of falling back."),
) -> None:
    """List the malformed-payload catalog or show one template."""

    if tag is None:
        table = Table(title="Malformed payloads")
        table.add_column("Tag", style="cyan", no_wrap=True)
        table.add_column("Body", style="white")
        for name, payload in iter_malformed_payloads():
            preview = json.dumps(payload, ensure_ascii=False)
            table.add_row(name, preview if len(preview) <= 80 else preview[:77] + "...")
        _console.print(table)
        return

    settings = ProbeSettings()
    try:
        payload = get_malformed_payload(tag, strict=strict or settings.strict_payload_tags)
    except UnknownPayloadTagError as exc:
        raise typer.BadParameter(str(exc)) from exc
    _console.print_json(json.dumps(payload, ensure_ascii=False))


@app.command("generate")
def generate_command(
    kind: DataKind = typer.Argument(DataKind.USER, help="What to generate."),
    assign: list[str] | None = typer.Option(None, "--set", "-s", help="Override a field: key=value."),
    length: int = typer.Option(12, "--length", help="Password length."),
) -> None:
    """Print freshly generated test data as JSON."""

    overrides = _parse_assignments(assign)
    data: Any
    if kind is DataKind.USER:
        data = generate_user_data(overrides).model_dump(by_alias=True, warnings=False)
    elif kind is DataKind.API_USER:
        data = generate_api_user_data(overrides)
    elif kind is DataKind.EMAIL:
        try:
            data = generate_unique_email(**overrides)
        except TypeError as exc:
            raise typer.BadParameter("email accepts only prefix=... and domain=...") from exc
    else:
        data = generate_secure_password(length)
    _console.print_json(json.dumps(data, ensure_ascii=False))


def run() -> None:
    app()
