"""Runner de la suite detrás de `account-probe run`.

Ejecuta pytest en un subproceso para el modo elegido, escribe JUnit XML por
intento y repite solo los fallos (`--last-failed`) hasta `retries` veces. Un
reintento vuelve a ejecutar el cuerpo completo del test, y los datos se
generan dentro, así cada intento envía datos únicos nuevos.
"""

from __future__ import annotations

import logging
import subprocess
import sys
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from xml.etree import ElementTree as ET

from core.domain.run_mode import RunMode

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_TESTS_FAILED = 1
EXIT_NO_TESTS = 5

Runner = Callable[..., "subprocess.CompletedProcess[Any]"]


@dataclass
class SuiteRunRequest:
    """Parámetros de una invocación de `run`."""

    mode: RunMode = RunMode.ALL
    live: bool = False
    retries: int = 0
    reports_dir: Path = Path("reports")
    test_path: str = "tests"
    extra_args: Sequence[str] = ()


@dataclass
class TestCaseOutcome:
    """Estado final de un caso de test a lo largo de los intentos."""

    __test__ = False

    name: str
    classname: str
    outcome: str
    message: str = ""
    time_seconds: float = 0.0
    attempts: int = 1

    @property
    def nodeid(self) -> str:
        return f"{self.classname}::{self.name}"


@dataclass
class SuiteRunResult:
    """Resultado de una ejecución de la suite."""

    mode: RunMode
    exit_code: int
    outcomes: list[TestCaseOutcome] = field(default_factory=list)
    attempts: int = 1
    junit_paths: list[Path] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    def count(self, outcome: str) -> int:
        return sum(1 for o in self.outcomes if o.outcome == outcome)

    @property
    def retried(self) -> list[TestCaseOutcome]:
        return [o for o in self.outcomes if o.attempts > 1]

    @property
    def no_tests_selected(self) -> bool:
        return self.exit_code == EXIT_NO_TESTS

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode.value,
            "exit_code": self.exit_code,
            "attempts": self.attempts,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
            "passed": self.count("passed"),
            "failed": self.count("failed"),
            "errors": self.count("error"),
            "skipped": self.count("skipped"),
            "junit": [str(p) for p in self.junit_paths],
            "tests": [
                {
                    "nodeid": o.nodeid,
                    "outcome": o.outcome,
                    "attempts": o.attempts,
                    "time_seconds": o.time_seconds,
                    "message": o.message,
                }
                for o in self.outcomes
            ],
        }


def build_pytest_command(
    request: SuiteRunRequest,
    *,
    junit_path: Path,
    last_failed: bool = False,
) -> list[str]:
    cmd = [
        sys.executable,
        "-m",
        "pytest",
        request.test_path,
        "-q",
        f"--junitxml={junit_path}",
    ]
    marker = request.mode.marker_expression()
    if marker:
        cmd += ["-m", marker]
    if request.live:
        cmd.append("--live")
    if last_failed:
        cmd.append("--last-failed")
    cmd += list(request.extra_args)
    return cmd


def parse_junit_cases(path: Path) -> list[TestCaseOutcome]:
    """Lee los resultados por test de un JUnit XML de pytest."""

    if not path.exists():
        return []

    root = ET.fromstring(path.read_text(encoding="utf-8"))
    cases: list[TestCaseOutcome] = []
    for case in root.iter("testcase"):
        outcome = "passed"
        message = ""
        for tag, label in (("failure", "failed"), ("error", "error"), ("skipped", "skipped")):
            node = case.find(tag)
            if node is not None:
                outcome = label
                message = (node.attrib.get("message") or node.text or "").strip()[:2000]
                break
        cases.append(
            TestCaseOutcome(
                name=case.attrib.get("name", "unknown"),
                classname=case.attrib.get("classname", ""),
                outcome=outcome,
                message=message,
                time_seconds=float(case.attrib.get("time", 0) or 0),
            )
        )
    return cases


def run_suite(request: SuiteRunRequest, *, runner: Runner = subprocess.run) -> SuiteRunResult:
    """Ejecuta el subconjunto elegido, reintentando fallos con datos nuevos."""

    request.reports_dir.mkdir(parents=True, exist_ok=True)
    started = time.perf_counter()

    merged: dict[str, TestCaseOutcome] = {}
    junit_paths: list[Path] = []
    exit_code = EXIT_OK
    attempts = 0

    for attempt in range(request.retries + 1):
        attempts = attempt + 1
        junit_path = request.reports_dir / f"junit-{request.mode.value}-attempt{attempts}.xml"
        cmd = build_pytest_command(request, junit_path=junit_path, last_failed=attempt > 0)
        logger.info("Running %s (attempt %d/%d): %s", request.mode.label(), attempts, request.retries + 1, " ".join(cmd))

        proc = runner(cmd, check=False)
        exit_code = proc.returncode
        junit_paths.append(junit_path)

        for case in parse_junit_cases(junit_path):
            previous = merged.get(case.nodeid)
            if previous is not None:
                case.attempts = previous.attempts + 1
            merged[case.nodeid] = case

        if exit_code != EXIT_TESTS_FAILED:
            break
        if attempt < request.retries:
            logger.warning("Attempt %d had failures; re-running failed tests", attempts)

    return SuiteRunResult(
        mode=request.mode,
        exit_code=exit_code,
        outcomes=list(merged.values()),
        attempts=attempts,
        junit_paths=junit_paths,
        elapsed_seconds=time.perf_counter() - started,
    )
