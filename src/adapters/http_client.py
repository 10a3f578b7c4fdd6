"""Wrapper de httpx para sondear la API de cuentas.

Por qué un wrapper:
- Estandariza timeouts, headers por defecto y logging en cada sondeo.
- Nunca convierte un no-2xx en excepción: el llamador decide qué códigos son
  aceptables para un escenario.
- Facilita testeo: basta con pasar un `httpx.AsyncClient` sobre `MockTransport`.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from typing import Any

import httpx

from core.config import ProbeSettings
from core.domain.models import ProbeResult
from core.errors import TransportError

logger = logging.getLogger(__name__)


def build_async_client(
    settings: ProbeSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con el timeout configurado.

    Solo el User-Agent vive en el cliente; el resto de headers por defecto se
    mezclan por petición para que un sondeo pueda quitar cualquiera.
    """

    settings = settings or ProbeSettings()
    headers: dict[str, str] = {"User-Agent": settings.user_agent}
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.request_timeout_seconds),
        follow_redirects=False,
        headers=headers,
    )


def _pretty(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, indent=2, ensure_ascii=False, default=str)
    return str(value)


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ProbeClient:
    """Emite peticiones contra la URL base de la API y captura resultados crudos.

    Se usa como context manager async. Sin cliente inyectado, se construye uno
    desde los settings y se cierra al salir; un cliente inyectado pertenece al
    llamador.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or ProbeSettings()
        self._client = client
        self._owns_client = client is None

    @property
    def settings(self) -> ProbeSettings:
        return self._settings

    async def __aenter__(self) -> "ProbeClient":
        if self._client is None:
            self._client = build_async_client(self._settings)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def build_url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        base = self._settings.api_base_url.rstrip("/")
        if path and not path.startswith("/"):
            path = "/" + path
        return f"{base}{path}"

    def merge_headers(self, headers: Mapping[str, str | None] | None = None) -> httpx.Headers:
        """Headers por defecto con los del llamador encima (sin distinguir mayúsculas).

        Un valor None del llamador elimina el header.
        """

        merged = httpx.Headers(self._settings.default_headers())
        for key, value in (headers or {}).items():
            if value is None:
                if key in merged:
                    del merged[key]
                continue
            merged[key] = value
        return merged

    async def request(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        content: str | bytes | None = None,
        headers: Mapping[str, str | None] | None = None,
        params: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> ProbeResult:
        """Envía una petición y devuelve su `ProbeResult`.

        `body` se codifica como JSON; `content` se envía tal cual (JSON malformado).
        Lanza `TransportError` solo si no se obtuvo respuesta HTTP.
        """

        if self._client is None:
            raise RuntimeError("ProbeClient must be used inside 'async with'")

        method = method.upper()
        url = self.build_url(path)
        payload: bytes | None = None
        if content is not None:
            payload = content.encode("utf-8") if isinstance(content, str) else content
        elif body is not None:
            payload = json.dumps(body, ensure_ascii=False).encode("utf-8")

        logger.info("API %s Request: %s", method, url)
        if body is not None or content is not None:
            logger.debug("Request Body:\n%s", _pretty(body if content is None else content))

        started = time.perf_counter()
        try:
            response = await self._client.request(
                method,
                url,
                content=payload,
                headers=self.merge_headers(headers),
                params=params,
                timeout=httpx.Timeout(timeout) if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TransportError as exc:
            logger.error("API %s %s failed: %s", method, url, exc)
            raise TransportError(str(exc) or type(exc).__name__, method=method, url=url) from exc
        elapsed_ms = (time.perf_counter() - started) * 1000.0

        result = ProbeResult(
            method=method,
            url=url,
            status_code=response.status_code,
            headers={k.lower(): v for k, v in response.headers.items()},
            body=_decode_body(response),
            elapsed_ms=elapsed_ms,
        )
        logger.info("API Response Status: %s (%.0f ms)", result.status_code, elapsed_ms)
        logger.debug("Response Body:\n%s", _pretty(result.body))
        return result
