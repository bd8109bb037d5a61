"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el cliente HTTP y el pipeline lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "csv-issues"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "csv-issues"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "csv-issues"
    return Path.home() / ".config" / "csv-issues"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# csv-issues user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="CSV_ISSUES_",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("CSV_ISSUES_GITHUB_TOKEN", "GITHUB_TOKEN", "github_token"),
        description="Personal Access Token con permiso de escritura sobre issues.",
    )
    api_base_url: str = Field(
        default="https://api.github.com",
        min_length=8,
        description="Base URL de la API REST de GitHub (GHES: https://host/api/v3).",
    )
    user_agent: str = Field(
        default="csv-to-github-issues",
        min_length=1,
        description="User-Agent enviado en cada request (GitHub lo exige).",
    )
    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )

    csv_file: Path = Field(
        default=Path("./issues.csv"),
        validation_alias=AliasChoices("CSV_ISSUES_CSV_FILE", "CSV_FILE", "csv_file"),
        description="Ruta del CSV con las issues a crear.",
    )

    # Pacing (rate limit de GitHub: 5000 req/h)
    label_delay_seconds: float = Field(
        default=0.1,
        ge=0,
        description="Pausa tras cada intento de creación de label.",
    )
    issue_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pausa tras cada issue creada.",
    )
    batch_size: int | None = Field(
        default=None,
        ge=1,
        description="Tamaño de lote; tras cada lote se aplica `batch_delay_seconds`.",
    )
    batch_delay_seconds: float = Field(
        default=0.0,
        ge=0,
        description="Pausa adicional entre lotes de issues.",
    )

    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
