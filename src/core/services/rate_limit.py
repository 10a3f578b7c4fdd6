"""Sondeo de rate limiting.

El colector dispara una ráfaga y devuelve todos los resultados en orden de
llamada. No clasifica: eso es `classify_responses`, para quien necesite
conteos.

`time_window_ms` es informativo. Se trata de observar el limitador del
objetivo, no de frenar al cliente.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from core.domain.models import ProbeResult, RateLimitBreakdown
from core.interfaces.requester import ProbeRequester
from core.services.test_data import generate_rate_limit_user

logger = logging.getLogger(__name__)

RATE_LIMIT_STATUSES = frozenset({429, 503})
DUPLICATE_STATUSES = frozenset({406, 409})
VALIDATION_STATUSES = frozenset({400, 422})


def _wants_fresh_user(method: str, endpoint: str) -> bool:
    return method == "POST" and "/user" in endpoint.lower()


async def run_rate_limit_probe(
    requester: ProbeRequester,
    endpoint: str,
    request_count: int = 10,
    time_window_ms: int = 1000,
    method: str = "POST",
    *,
    concurrent: bool = False,
    max_concurrency: int = 10,
) -> list[ProbeResult]:
    """Envía `request_count` peticiones a `endpoint` y recoge los resultados.

    Secuencial por defecto: cada petición se espera antes de enviar la
    siguiente, sin solapamiento a nivel de red. `concurrent=True` las lanza como
    tareas asyncio (acotadas por `max_concurrency`) para estresar de verdad el
    limitador; los resultados siguen en orden de llamada. Si alguna falla, se
    espera al resto y luego se propaga el primer error.

    Los POST a un endpoint de alta de usuario reciben un cuerpo único nuevo por
    iteración, así un rechazo por duplicado no se confunde con limitación.
    """

    if request_count < 0:
        raise ValueError("request_count must be >= 0")

    method = method.upper()
    fresh_user = _wants_fresh_user(method, endpoint)
    logger.info(
        "Rate limit probe: %d x %s %s (window %d ms, %s)",
        request_count,
        method,
        endpoint,
        time_window_ms,
        "concurrent" if concurrent else "sequential",
    )

    async def send(index: int) -> ProbeResult:
        body: dict[str, Any] | None = generate_rate_limit_user(index) if fresh_user else None
        result = await requester.request(method, endpoint, body=body)
        logger.info("Rate limit request %d - Status: %s", index + 1, result.status_code)
        return result

    if concurrent:
        sem = asyncio.Semaphore(max(1, max_concurrency))

        async def bounded(index: int) -> ProbeResult:
            async with sem:
                return await send(index)

        outcomes = await asyncio.gather(
            *(bounded(i) for i in range(request_count)),
            return_exceptions=True,
        )
        # Se espera a todas las tareas antes de propagar el primer error.
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome
        results = list(outcomes)
    else:
        results = []
        for i in range(request_count):
            results.append(await send(i))

    limited = sum(1 for r in results if r.status_code in RATE_LIMIT_STATUSES)
    logger.info("Rate limit probe: %d/%d requests were rate limited", limited, request_count)
    return results


def classify_responses(results: Iterable[ProbeResult]) -> RateLimitBreakdown:
    """Cuenta los resultados de una ráfaga por familia de estado."""

    counts = {
        "total": 0,
        "successful": 0,
        "rate_limited": 0,
        "duplicates": 0,
        "validation_errors": 0,
        "other": 0,
    }
    for result in results:
        counts["total"] += 1
        status = result.status_code
        if result.is_success:
            counts["successful"] += 1
        elif status in RATE_LIMIT_STATUSES:
            counts["rate_limited"] += 1
        elif status in DUPLICATE_STATUSES:
            counts["duplicates"] += 1
        elif status in VALIDATION_STATUSES:
            counts["validation_errors"] += 1
        else:
            counts["other"] += 1
    return RateLimitBreakdown(**counts)
