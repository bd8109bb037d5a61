"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El `RunSummary` se serializa a JSON tal cual para el reporte.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

# Una fila del CSV: header -> valor.
Row = dict[str, str]


class LabelDefinition(BaseModel):
    """Label del catálogo fijo (nombre, color hex sin '#', descripción)."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, max_length=50)
    color: str = Field(..., pattern=r"^[0-9a-fA-F]{6}$")
    description: str = Field(default="", max_length=100)

    def to_payload(self) -> dict[str, str]:
        return {"name": self.name, "color": self.color, "description": self.description}


class IssueDescriptor(BaseModel):
    """Campos reconocidos de una fila.

    Headers ausentes quedan como cadena vacía; el resto de headers se ignora.
    """

    model_config = ConfigDict(extra="ignore")

    title: str = Field(default="", alias="Title")
    description: str = Field(default="", alias="Description")
    priority: str = Field(default="", alias="Priority")
    type: str = Field(default="", alias="Type")
    labels: str = Field(default="", alias="Labels")
    difficulty: str = Field(default="", alias="Difficulty")
    component: str = Field(default="", alias="Component")

    @classmethod
    def from_row(cls, row: Mapping[str, str]) -> "IssueDescriptor":
        return cls.model_validate(dict(row))

    @property
    def has_title(self) -> bool:
        return bool(self.title.strip())


class CreatedIssue(BaseModel):
    """Issue devuelta por la API tras crearse."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    number: int = Field(..., description="Número de la issue en el repositorio.")
    html_url: str = Field(..., description="URL pública de la issue.")
    title: str = Field(default="", description="Título tal como lo guardó GitHub.")


class FailedIssue(BaseModel):
    """Fila cuya creación falló, con el error que lo provocó."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    row: Row
    title: str
    error: str
    status_code: int | None = None
    exception: Exception | None = Field(default=None, exclude=True, repr=False)


class PlannedIssue(BaseModel):
    """Issue que se habría creado (modo dry-run)."""

    title: str
    body: str = ""
    labels: list[str] = Field(default_factory=list)


class LabelReport(BaseModel):
    """Resultado del aprovisionamiento de labels."""

    created: list[str] = Field(default_factory=list)
    existing: list[str] = Field(default_factory=list)
    already_existed: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)
    planned: list[str] = Field(default_factory=list)
    listing_failed: bool = False


class RunSummary(BaseModel):
    """Agregado de una ejecución del pipeline."""

    repository: str
    dry_run: bool = False
    total_rows: int = Field(default=0, ge=0, description="Filas parseadas del CSV.")
    skipped: int = Field(default=0, ge=0, description="Filas sin título (no cuentan como fallo).")
    created: list[CreatedIssue] = Field(default_factory=list)
    failed: list[FailedIssue] = Field(default_factory=list)
    planned: list[PlannedIssue] = Field(default_factory=list)
    labels: LabelReport = Field(default_factory=LabelReport)

    @property
    def created_count(self) -> int:
        return len(self.created)

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    def to_json_dict(self) -> dict[str, Any]:
        payload = self.model_dump(mode="json")
        payload["created_count"] = self.created_count
        payload["failed_count"] = self.failed_count
        return payload
