"""Wrapper de httpx para la API REST de GitHub.

Por qué un wrapper:
- Estandariza timeouts, headers de autenticación y el mapeo de errores.
- Facilita testeo: se puede sustituir por un stub o por `httpx.MockTransport`.

Política:
- 2xx -> JSON parseado. Cualquier otro status -> `ApiError` con el campo
  `message` de GitHub (o el texto crudo si no es JSON).
- Sin reintentos: el llamador decide si continúa o aborta.
"""

from __future__ import annotations

import json
import logging
from types import TracebackType
from typing import Any

import httpx

from core.config import AppSettings
from core.errors import ApiError, TransportError

logger = logging.getLogger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    token: str | None = None,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` apuntando a la API con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todas las llamadas se comporten igual.
    - `transport` permite inyectar un `MockTransport` en tests.
    """

    settings = settings or AppSettings()
    token = token if token is not None else settings.github_token
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": GITHUB_ACCEPT,
    }
    if token:
        headers["Authorization"] = f"token {token}"
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=headers,
        transport=transport,
    )


def _error_from_response(response: httpx.Response) -> ApiError:
    text = response.text
    message = text
    codes: list[str] = []
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        if isinstance(data.get("message"), str) and data["message"]:
            message = data["message"]
        errors = data.get("errors")
        if isinstance(errors, list):
            for item in errors:
                if isinstance(item, dict) and isinstance(item.get("code"), str):
                    codes.append(item["code"])
    return ApiError(message, status_code=response.status_code, error_codes=codes)


class GitHubClient:
    """Cliente asíncrono mínimo: un único método `request`.

    Uso:
        async with GitHubClient(settings, token=token) as client:
            repo = await client.request("/repos/octo/demo")
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._client = http_client or build_async_client(self._settings, token=token)

    async def request(self, path: str, method: str = "GET", body: Any | None = None) -> Any:
        headers: dict[str, str] = {}
        content: bytes | None = None
        if body is not None:
            content = json.dumps(body).encode("utf-8")
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, path)
        try:
            response = await self._client.request(method, path, content=content, headers=headers)
        except httpx.TransportError as exc:
            raise TransportError(f"{exc.__class__.__name__}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise _error_from_response(response)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                f"Failed to parse response: {response.text}",
                status_code=response.status_code,
            ) from exc

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
