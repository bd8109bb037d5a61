"""Contrato del cliente de la API de GitHub.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Los servicios del Core dependen solo de `request`, así que en tests se
  sustituye por un doble en memoria que cuenta las llamadas.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class GitHubApi(Protocol):
    """Contrato mínimo para hablar con la API REST.

    Reglas de diseño:
    - `request` es asíncrono porque hace I/O (HTTP).
    - Devuelve el JSON parseado si el status es 2xx; si no, lanza `ApiError`.
    """

    async def request(self, path: str, method: str = "GET", body: Any | None = None) -> Any:
        """Ejecuta `method path` y devuelve el cuerpo JSON decodificado."""

        ...
