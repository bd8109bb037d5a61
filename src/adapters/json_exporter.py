"""Exportación JSON del resumen de ejecución.

Por qué JSON:
- Interoperabilidad con otras herramientas y pipelines (CI).
- Deja constancia de qué issues se crearon/fallaron sin depender de la consola.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import RunSummary


def export_summary_json(*, summary: RunSummary, output_path: Path) -> Path:
    """Exporta `RunSummary` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = summary.to_json_dict()
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
