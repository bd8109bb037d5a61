"""CSV -> GitHub issues orchestration.

The CLI delegates the whole run to `run_import`: it validates the
configuration, checks repository access, asks for confirmation, provisions
the label catalog and creates issues one row at a time. Side-effects meant for
a UI (progress, prompts) go through `PipelineHooks` and the injected
`confirm` callable, which keeps the pipeline reusable from tests and other
entry-points.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Union

from pydantic import BaseModel, Field

from adapters.csv_reader import read_csv_file
from adapters.http_client import GitHubClient
from core.config import AppSettings
from core.domain.models import (
    CreatedIssue,
    FailedIssue,
    IssueDescriptor,
    LabelDefinition,
    Row,
    RunSummary,
)
from core.errors import (
    AccessError,
    ApiError,
    ConfigurationError,
    CsvFileNotFoundError,
    CsvReadError,
    IssueCreationError,
    RunCancelled,
)
from core.interfaces.api import GitHubApi
from core.services.issue_creator import build_issue_payload, create_issue
from core.services.label_provisioner import ensure_labels
from core.services.pacing import PacingPolicy

logger = logging.getLogger(__name__)

ConfirmFn = Callable[[int], Union[bool, Awaitable[bool]]]


class PipelineState(str, Enum):
    VALIDATING = "validating"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    PROVISIONING = "provisioning"
    CREATING = "creating"
    SUMMARIZING = "summarizing"
    DONE = "done"
    ABORTED = "aborted"


class ImportConfig(BaseModel):
    """Everything a run needs, already resolved from CLI/env."""

    owner: str = ""
    repo: str = ""
    csv_path: Path | None = None
    token: str = Field(default="", repr=False)
    dry_run: bool = False

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.repo}"

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        repository: str,
        csv_path: Path | None = None,
        token: str | None = None,
        dry_run: bool = False,
    ) -> "ImportConfig":
        owner, repo = parse_repository(repository)
        return cls(
            owner=owner,
            repo=repo,
            csv_path=csv_path or settings.csv_file,
            token=token or settings.github_token or "",
            dry_run=dry_run,
        )


@dataclass
class PipelineHooks:
    """Optional callbacks for UI layers (progress, warnings)."""

    on_state: Callable[[PipelineState], None] | None = None
    warning: Callable[[str], None] | None = None
    label_created: Callable[[LabelDefinition], None] | None = None
    issue_created: Callable[[CreatedIssue], None] | None = None
    issue_failed: Callable[[FailedIssue], None] | None = None


def parse_repository(value: str) -> tuple[str, str]:
    """Split an `owner/repo` slug."""

    owner, sep, repo = value.strip().partition("/")
    if not sep or not owner.strip() or not repo.strip() or "/" in repo:
        raise ConfigurationError(
            f"Repository must look like OWNER/REPO (got {value!r})"
        )
    return owner.strip(), repo.strip()


def validate_config(config: ImportConfig) -> Path:
    """Check the local preconditions; returns the CSV path."""

    if not config.token.strip():
        raise ConfigurationError("GitHub token is required")
    if not config.owner.strip() or not config.repo.strip():
        raise ConfigurationError("Repository owner and name are required")
    if config.csv_path is None:
        raise ConfigurationError("CSV file path is required")
    if not config.csv_path.is_file():
        raise CsvFileNotFoundError(config.csv_path)
    return config.csv_path


async def verify_access(client: GitHubApi, owner: str, repo: str) -> dict:
    try:
        data = await client.request(f"/repos/{owner}/{repo}")
    except ApiError as exc:
        raise AccessError(f"Failed to access repository {owner}/{repo}: {exc}") from exc
    return data if isinstance(data, dict) else {}


async def _ask(confirm: ConfirmFn, count: int) -> bool:
    answer = confirm(count)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)


async def _create_all(
    client: GitHubApi,
    rows: list[Row],
    config: ImportConfig,
    summary: RunSummary,
    pacing: PacingPolicy,
    hooks: PipelineHooks,
) -> None:
    pending = [(row, IssueDescriptor.from_row(row)) for row in rows]
    candidates = [(row, issue) for row, issue in pending if issue.has_title]
    summary.skipped = len(pending) - len(candidates)

    for attempted, (row, issue) in enumerate(candidates, start=1):
        if config.dry_run:
            summary.planned.append(build_issue_payload(issue))
            continue
        try:
            created = await create_issue(client, issue, config.owner, config.repo, pacing=pacing)
        except IssueCreationError as exc:
            failure = FailedIssue(
                row=row,
                title=issue.title,
                error=str(exc),
                status_code=exc.status_code,
                exception=exc,
            )
            summary.failed.append(failure)
            if hooks.issue_failed:
                hooks.issue_failed(failure)
        else:
            summary.created.append(created)
            if hooks.issue_created:
                hooks.issue_created(created)
        await pacing.after_row(attempted, len(candidates) - attempted)


async def run_import(
    config: ImportConfig,
    *,
    settings: AppSettings | None = None,
    client: GitHubApi | None = None,
    confirm: ConfirmFn | None = None,
    pacing: PacingPolicy | None = None,
    hooks: PipelineHooks | None = None,
) -> RunSummary:
    """Run the whole import and return its summary.

    Raises (all before any label or issue is created):
        ConfigurationError: missing token, owner/repo or CSV path.
        CsvFileNotFoundError: the CSV path does not exist.
        CsvReadError: the CSV exists but cannot be read or decoded.
        AccessError: the repository access check failed (auth, 404, network).
        RunCancelled: `confirm` returned False.
    """

    hooks = hooks or PipelineHooks()
    settings = settings or AppSettings()
    pacing = pacing or PacingPolicy.from_settings(settings)

    def enter(state: PipelineState) -> None:
        logger.debug("Pipeline state: %s", state.value)
        if hooks.on_state:
            hooks.on_state(state)

    enter(PipelineState.VALIDATING)
    try:
        csv_path = validate_config(config)
    except (ConfigurationError, CsvFileNotFoundError):
        enter(PipelineState.ABORTED)
        raise

    owned_client: GitHubClient | None = None
    if client is None:
        owned_client = GitHubClient(settings, token=config.token)
        client = owned_client

    try:
        try:
            repo_info = await verify_access(client, config.owner, config.repo)
            rows = read_csv_file(csv_path)
        except (AccessError, CsvFileNotFoundError, CsvReadError):
            enter(PipelineState.ABORTED)
            raise
        logger.info("Repository: %s", repo_info.get("full_name", config.repository))
        logger.info("Found %d rows to import into %s", len(rows), config.repository)

        if confirm is not None and not config.dry_run:
            enter(PipelineState.AWAITING_CONFIRMATION)
            if not await _ask(confirm, len(rows)):
                enter(PipelineState.ABORTED)
                raise RunCancelled("Import cancelled before creating anything")

        summary = RunSummary(
            repository=config.repository,
            dry_run=config.dry_run,
            total_rows=len(rows),
        )

        enter(PipelineState.PROVISIONING)
        summary.labels = await ensure_labels(
            client,
            config.owner,
            config.repo,
            pacing=pacing,
            dry_run=config.dry_run,
            on_created=hooks.label_created,
        )
        if summary.labels.listing_failed and hooks.warning:
            hooks.warning("Could not fetch existing labels; tried to create the whole catalog.")

        enter(PipelineState.CREATING)
        await _create_all(client, rows, config, summary, pacing, hooks)

        enter(PipelineState.SUMMARIZING)
        logger.info("Created: %d issues", summary.created_count)
        logger.info("Failed: %d issues", summary.failed_count)
        enter(PipelineState.DONE)
        return summary
    finally:
        if owned_client is not None:
            await owned_client.aclose()
