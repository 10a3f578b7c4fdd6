"""Configuración del core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin filtrarlas a la CLI
  ni a los módulos de test.
- Da al cliente de sondeo y al runner de la suite un único contrato de solo
  lectura.

El objeto de settings es inmutable: se construye una vez al arrancar el
proceso y se pasa a quien lo necesite.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (multiplataforma, sin deps extra)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "account-probe"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "account-probe"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "account-probe"
    return Path.home() / ".config" / "account-probe"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class ProbeSettings(BaseSettings):
    """Configuración central para sondeos y ejecuciones de la suite."""

    model_config = SettingsConfigDict(
        env_prefix="ACCOUNT_PROBE_",
        extra="ignore",
        case_sensitive=False,
        # Orden: .env del proyecto primero (dev), luego el del usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        frozen=True,
    )

    api_base_url: str = Field(
        default="https://demoqa.com",
        min_length=8,
        description="Base URL of the user-account API under test.",
    )
    ui_base_url: str = Field(
        default="https://app.ramp.com",
        min_length=8,
        description="Base URL of the sign-up/login UI (used by external UI suites).",
    )

    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Request/response timeout per probe (seconds).",
    )
    test_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Upper bound for a whole test case (seconds).",
    )
    retry_attempts: int = Field(
        default=2,
        ge=0,
        le=10,
        description="How many times failed tests are re-run in `run` mode.",
    )

    viewport_width: int = Field(default=1920, ge=320)
    viewport_height: int = Field(default=1080, ge=240)

    user_agent: str = Field(
        default="account-probe-test-runner",
        min_length=1,
        description="User-Agent marker sent with every probe.",
    )
    test_run_marker: str = Field(
        default="account-probe-automation",
        min_length=1,
        description="Value of the X-Test-Run header.",
    )

    rate_limit_concurrent: bool = Field(
        default=False,
        description="Issue rate-limit bursts as concurrent tasks instead of back-to-back awaits.",
    )
    rate_limit_max_concurrency: int = Field(default=10, ge=1, le=500)

    strict_payload_tags: bool = Field(
        default=False,
        description="Raise on unknown malformed-payload tags instead of falling back to emptyObject.",
    )

    reports_dir: Path = Field(
        default=Path("reports"),
        description="Where `run` writes JUnit XML and HTML/JSON reports.",
    )
    fixtures_path: Path | None = Field(
        default=None,
        description="Explicit path to the test-data fixture JSON.",
    )

    def default_headers(self) -> dict[str, str]:
        """Headers de partida de cada sondeo; el llamador puede sobrescribir cualquiera."""

        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
            "X-Test-Run": self.test_run_marker,
        }
