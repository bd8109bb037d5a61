"""Lector de CSV minimalista.

Formato aceptado:
- Primera línea = headers.
- Campos separados por coma; las comillas dobles agrupan (una coma dentro de
  comillas no separa).

Limitaciones conocidas (intencionales):
- No hay escape de comillas (`""`) ni campos multilínea.
- Las filas cuyo número de campos no coincide con los headers se descartan
  sin error.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.domain.models import Row
from core.errors import CsvFileNotFoundError, CsvReadError

logger = logging.getLogger(__name__)


def parse_csv_line(line: str) -> list[str]:
    """Divide una línea en campos (recortados), respetando comillas."""

    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str) -> list[Row]:
    lines = text.strip().split("\n")
    headers = parse_csv_line(lines[0])
    rows: list[Row] = []

    for lineno, line in enumerate(lines[1:], start=2):
        values = parse_csv_line(line)
        if len(values) != len(headers):
            logger.debug(
                "Dropping CSV line %d: %d fields, expected %d", lineno, len(values), len(headers)
            )
            continue
        rows.append(dict(zip(headers, values)))

    return rows


def read_csv_file(path: Path) -> list[Row]:
    """Lee y parsea un CSV UTF-8 (con o sin BOM)."""

    if not path.is_file():
        raise CsvFileNotFoundError(path)
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as exc:
        raise CsvReadError(path, f"not UTF-8 ({exc.reason} at byte {exc.start})") from exc
    except OSError as exc:
        raise CsvReadError(path, exc.strerror or str(exc)) from exc
    return parse_csv(raw)
