"""Errores tipados del Core.

Fatales (abortan antes de mutar el repositorio): `ConfigurationError`,
`CsvFileNotFoundError`, `CsvReadError`, `AccessError`, `RunCancelled`.
No fatales (se aíslan por label/fila y terminan en el resumen):
`LabelProvisionError`, `IssueCreationError`.
"""

from __future__ import annotations

from typing import Sequence


class CsvIssuesError(Exception):
    """Raíz de todos los errores del proyecto."""


class ConfigurationError(CsvIssuesError):
    """Falta token, owner/repo o ruta del CSV."""


class CsvFileNotFoundError(CsvIssuesError, FileNotFoundError):
    """El CSV no existe o no es un fichero legible."""

    def __init__(self, path: object) -> None:
        super().__init__(f"{path} not found")
        self.path = path


class CsvReadError(CsvIssuesError):
    """El CSV existe pero no se puede leer (permisos, codificación distinta de UTF-8)."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"{path} could not be read: {reason}")
        self.path = path


class RunCancelled(CsvIssuesError):
    """El usuario rechazó la confirmación previa a las mutaciones."""


class ApiError(CsvIssuesError):
    """Respuesta no exitosa (o ilegible) de la API de GitHub."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_codes: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_codes = tuple(error_codes)

    def __str__(self) -> str:
        if self.status_code is None:
            return self.message
        return f"HTTP {self.status_code}: {self.message}"

    @property
    def already_exists(self) -> bool:
        return "already_exists" in self.error_codes or "already_exists" in self.message


class TransportError(ApiError):
    """Fallo de red (conexión, DNS, timeout) antes de obtener respuesta."""


class AccessError(CsvIssuesError):
    """La verificación de acceso al repositorio falló."""


class LabelProvisionError(ApiError):
    """No se pudo crear un label del catálogo."""


class IssueCreationError(ApiError):
    """No se pudo crear la issue de una fila."""

    @classmethod
    def from_api_error(cls, error: ApiError) -> "IssueCreationError":
        return cls(error.message, status_code=error.status_code, error_codes=error.error_codes)
