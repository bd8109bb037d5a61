"""Create one issue from one CSV row."""

from __future__ import annotations

import logging
from typing import Mapping

from pydantic import ValidationError

from core.domain.labels import derive_labels
from core.domain.models import CreatedIssue, IssueDescriptor, PlannedIssue
from core.errors import ApiError, IssueCreationError
from core.interfaces.api import GitHubApi
from core.services.pacing import PacingPolicy

logger = logging.getLogger(__name__)


def issues_path(owner: str, repo: str) -> str:
    return f"/repos/{owner}/{repo}/issues"


def build_issue_payload(issue: IssueDescriptor) -> PlannedIssue:
    """Title, body and derived labels exactly as they will be submitted."""

    return PlannedIssue(title=issue.title, body=issue.description, labels=derive_labels(issue))


async def create_issue(
    client: GitHubApi,
    row: Mapping[str, str] | IssueDescriptor,
    owner: str,
    repo: str,
    *,
    pacing: PacingPolicy | None = None,
) -> CreatedIssue:
    """Submit the issue and wait the issue delay after a successful creation.

    Raises:
        IssueCreationError: the API rejected the request or the response
            did not describe an issue.
    """

    pacing = pacing or PacingPolicy()
    issue = row if isinstance(row, IssueDescriptor) else IssueDescriptor.from_row(row)
    payload = build_issue_payload(issue)

    logger.info("Creating issue: %s", issue.title)
    logger.debug("Labels: %s", ", ".join(payload.labels))

    try:
        result = await client.request(issues_path(owner, repo), "POST", payload.model_dump())
        created = CreatedIssue.model_validate(result)
    except ApiError as exc:
        logger.error("Failed to create issue %r: %s", issue.title, exc)
        raise IssueCreationError.from_api_error(exc) from exc
    except ValidationError as exc:
        logger.error("Unexpected response creating issue %r", issue.title)
        raise IssueCreationError(f"Unexpected response: {exc.error_count()} invalid field(s)") from exc

    logger.info("Created: #%d - %s (%s)", created.number, issue.title, created.html_url)
    await pacing.after_issue()
    return created
