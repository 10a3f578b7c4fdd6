"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.fixtures import load_default_test_data
from adapters.http_client import ProbeClient
from core.config import ProbeSettings, get_user_env_file
from core.errors import TransportError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: ProbeSettings) -> tuple[bool, str]:
    try:
        async with ProbeClient(settings) as client:
            result = await client.request("GET", "/")
        return True, f"HTTP {result.status_code} in {result.elapsed_ms:.0f} ms"
    except TransportError as exc:
        return False, str(exc)


def _check_fixtures(settings: ProbeSettings) -> tuple[bool, str]:
    try:
        data = load_default_test_data(settings)
    except (FileNotFoundError, ValueError) as exc:
        return False, str(exc)
    api = data.api_test_data
    return True, f"{len(api.boundary_values)} boundary cases, {len(api.malformed_requests)} malformed requests"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ProbeSettings()

    table = Table(title="account-probe Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("API base_url", "OK", settings.api_base_url)
    table.add_row("UI base_url", "OK", settings.ui_base_url)
    table.add_row("Timeout", "OK", f"{settings.request_timeout_seconds:g} s per request")
    table.add_row("Retries", "OK", str(settings.retry_attempts))
    env_file = get_user_env_file()
    table.add_row("User .env", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    # Fixtures
    ok_fixtures, detail_fixtures = _check_fixtures(settings)
    table.add_row("Fixtures", "OK" if ok_fixtures else "FAIL", detail_fixtures)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] `run --live` needs the API to be reachable; "
            "the default run uses the in-process fake and works offline."
        )
