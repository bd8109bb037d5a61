"""CLI principal (Typer).

Por qué aquí solo hay "pegamento":
- La CLI resuelve argumentos/env, pide confirmación y pinta resultados.
- Toda la lógica vive en `core.services.import_pipeline`.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from adapters.json_exporter import export_summary_json
from cli import doctor
from cli.ui_components import (
    build_created_table,
    build_failed_table,
    build_labels_table,
    build_planned_table,
    build_summary_panel,
    print_banner,
)
from core.config import AppSettings
from core.domain.labels import LABEL_CATALOG
from core.domain.models import CreatedIssue, FailedIssue
from core.errors import (
    AccessError,
    ConfigurationError,
    CsvFileNotFoundError,
    CsvReadError,
    RunCancelled,
)
from core.logging_setup import configure_logging
from core.services.import_pipeline import ImportConfig, PipelineHooks, run_import
from core.services.pacing import PacingPolicy

app = typer.Typer(
    no_args_is_help=True,
    help="Bulk-create GitHub issues (and their labels) from a CSV file.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def _confirm_prompt(count: int) -> bool:
    _console.print(f"This will create up to [bold]{count}[/bold] issues in the repository.")
    return typer.confirm("Continue?", default=False)


@app.command(name="import")
def import_issues(
    repository: str = typer.Argument(..., help="Target repository as OWNER/REPO."),
    csv_file: Optional[Path] = typer.Option(
        None, "--csv", "-c", help="CSV file (default: $CSV_FILE or ./issues.csv)."
    ),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="GitHub token (default: $GITHUB_TOKEN).", show_default=False
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be created, create nothing."),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", min=1, help="Pause after every N issues."),
    batch_delay: Optional[float] = typer.Option(None, "--batch-delay", min=0.0, help="Pause length between batches (s)."),
    report: Optional[Path] = typer.Option(None, "--report", help="Write the run summary as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
    no_banner: bool = typer.Option(False, "--no-banner", help="Do not print the banner."),
) -> None:
    """Create labels and issues in OWNER/REPO from the CSV rows."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level, console=Console(stderr=True))

    if not no_banner:
        print_banner(_console)

    try:
        config = ImportConfig.from_settings(
            settings,
            repository=repository,
            csv_path=csv_file,
            token=token,
            dry_run=dry_run,
        )
    except ConfigurationError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc

    overrides = {}
    if batch_size is not None:
        overrides["batch_size"] = batch_size
    if batch_delay is not None:
        overrides["batch_delay_seconds"] = batch_delay
    if overrides:
        settings = settings.model_copy(update=overrides)

    hooks = PipelineHooks(
        warning=lambda message: _console.print(f"[yellow]{message}[/yellow]"),
        issue_created=_on_created,
        issue_failed=_on_failed,
    )

    try:
        summary = asyncio.run(
            run_import(
                config,
                settings=settings,
                confirm=None if yes else _confirm_prompt,
                pacing=PacingPolicy.from_settings(settings),
                hooks=hooks,
            )
        )
    except ConfigurationError as exc:
        _console.print(f"[red]{exc}[/red]")
        _console.print("   Create a Personal Access Token at: https://github.com/settings/tokens")
        raise typer.Exit(code=1) from exc
    except (CsvFileNotFoundError, CsvReadError) as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    except AccessError as exc:
        _console.print(f"[red]{exc}[/red]")
        _console.print("   Check your token permissions and repository name")
        raise typer.Exit(code=1) from exc
    except RunCancelled as exc:
        _console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=1) from exc

    _console.print(build_summary_panel(summary))
    if summary.planned:
        _console.print(build_planned_table(summary))
    if summary.failed:
        _console.print(build_failed_table(summary))
    if summary.created:
        _console.print(build_created_table(summary))

    if report:
        path = export_summary_json(summary=summary, output_path=report)
        _console.print(f"[green]Report written to:[/green] {path}")

    _console.print("Done!")


def _on_created(issue: CreatedIssue) -> None:
    _console.print(f"[green]Created[/green] #{issue.number} - {issue.title}  {issue.html_url}")


def _on_failed(failure: FailedIssue) -> None:
    _console.print(f"[red]Failed[/red] {failure.title}: {failure.error}")


@app.command()
def labels() -> None:
    """Show the built-in label catalog provisioned before every import."""

    _console.print(build_labels_table(LABEL_CATALOG))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
