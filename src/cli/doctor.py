"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from adapters.csv_reader import read_csv_file
from adapters.http_client import GitHubClient
from core.config import AppSettings, write_user_env_vars
from core.errors import AccessError, ApiError, ConfigurationError, CsvFileNotFoundError, CsvReadError
from core.services.import_pipeline import parse_repository, verify_access

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_api(settings: AppSettings, repository: str | None) -> list[tuple[str, bool, str]]:
    checks: list[tuple[str, bool, str]] = []
    async with GitHubClient(settings) as client:
        try:
            data = await client.request("/rate_limit")
            remaining = (data or {}).get("rate", {}).get("remaining", "?")
            checks.append(("API connectivity", True, f"rate limit remaining: {remaining}"))
        except ApiError as exc:
            checks.append(("API connectivity", False, str(exc)))

        if repository:
            try:
                owner, repo = parse_repository(repository)
                info = await verify_access(client, owner, repo)
                checks.append(("Repository access", True, str(info.get("full_name", repository))))
            except (ConfigurationError, AccessError) as exc:
                checks.append(("Repository access", False, str(exc)))
    return checks


def _check_csv(path: Path) -> tuple[bool, str]:
    try:
        rows = read_csv_file(path)
    except (CsvFileNotFoundError, CsvReadError) as exc:
        return False, str(exc)
    titled = sum(1 for row in rows if row.get("Title", "").strip())
    return True, f"{len(rows)} rows ({titled} with a title)"


@app.command()
def run(
    repository: Optional[str] = typer.Argument(None, help="Optionally check OWNER/REPO access."),
    csv_file: Optional[Path] = typer.Option(None, "--csv", "-c", help="CSV file to check."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="csv-issues Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.github_token:
        table.add_row("GitHub token", "OK", "Token found")
    else:
        table.add_row("GitHub token", "MISSING", "Set GITHUB_TOKEN or run `csv-issues doctor setup-token`")
    table.add_row("API base_url", "OK", settings.api_base_url)

    # Connectivity (best-effort)
    for name, ok, detail in asyncio.run(_check_api(settings, repository)):
        table.add_row(name, "OK" if ok else "FAIL", detail)

    # CSV
    ok_csv, detail_csv = _check_csv(csv_file or settings.csv_file)
    table.add_row("CSV file", "OK" if ok_csv else "FAIL", detail_csv)

    _console.print(table)

    if not settings.github_token:
        _console.print(
            "\n[yellow]Note:[/yellow] Create a Personal Access Token at https://github.com/settings/tokens"
        )


@app.command(name="setup-token")
def setup_token() -> None:
    """Interactive token setup (stores it in the user config .env)."""

    token = typer.prompt("GitHub token", hide_input=True, confirmation_prompt=False).strip()
    if not token:
        raise typer.BadParameter("token is required")

    base_url = typer.prompt(
        "API base URL",
        default=AppSettings.model_fields["api_base_url"].default,
        show_default=True,
    ).strip()

    env_path = write_user_env_vars(
        {
            "CSV_ISSUES_GITHUB_TOKEN": token,
            "CSV_ISSUES_API_BASE_URL": base_url,
        }
    )

    _console.print(f"[green]Saved token to:[/green] {env_path}")
