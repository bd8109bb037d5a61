"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import LabelDefinition, RunSummary


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("GitHub Issues Bulk Creator", style="bold cyan")
    subtitle = Text("CSV • Labels • Issues", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_labels_table(labels: Iterable[LabelDefinition]) -> Table:
    table = Table(title="Label catalog")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Color", no_wrap=True)
    table.add_column("Description", style="white")
    for label in labels:
        table.add_row(label.name, Text(f"#{label.color}", style=f"#{label.color}"), label.description)
    return table


def build_created_table(summary: RunSummary) -> Table:
    table = Table(title="Created issues")
    table.add_column("#", style="green", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("URL", style="magenta")
    for issue in summary.created:
        table.add_row(str(issue.number), issue.title, issue.html_url)
    return table


def build_failed_table(summary: RunSummary) -> Table:
    table = Table(title="Failed issues")
    table.add_column("Title", style="white")
    table.add_column("Error", style="red")
    for failure in summary.failed:
        table.add_row(failure.title, failure.error)
    return table


def build_planned_table(summary: RunSummary) -> Table:
    table = Table(title="Planned issues (dry run)")
    table.add_column("Title", style="white")
    table.add_column("Labels", style="cyan")
    for planned in summary.planned:
        table.add_row(planned.title, ", ".join(planned.labels))
    return table


def build_summary_panel(summary: RunSummary) -> Panel:
    """Panel con los contadores del `RunSummary`."""

    body = Text()
    body.append(f"Repository: {summary.repository}\n")
    body.append(f"Rows: {summary.total_rows}  (skipped without title: {summary.skipped})\n")
    if summary.dry_run:
        body.append(f"Planned: {len(summary.planned)} issues\n", style="cyan")
        body.append(f"Labels to create: {len(summary.labels.planned)}", style="dim")
    else:
        body.append(f"Created: {summary.created_count} issues\n", style="green")
        body.append(f"Failed: {summary.failed_count} issues\n", style="red" if summary.failed else "dim")
        body.append(
            f"Labels created: {len(summary.labels.created)}  failed: {len(summary.labels.failed)}",
            style="dim",
        )
    title = Text("Summary", style="bold yellow")
    return Panel(body, title=title, border_style="yellow")
