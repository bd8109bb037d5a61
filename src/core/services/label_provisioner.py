"""Reconcile the built-in label catalog against the repository.

Best effort by contract: listing failures fall back to "nothing exists" and
per-label failures are logged and recorded, never raised.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from core.domain.labels import LABEL_CATALOG
from core.domain.models import LabelDefinition, LabelReport
from core.errors import ApiError, LabelProvisionError
from core.interfaces.api import GitHubApi
from core.services.pacing import PacingPolicy

logger = logging.getLogger(__name__)


def labels_path(owner: str, repo: str) -> str:
    return f"/repos/{owner}/{repo}/labels"


async def get_existing_labels(client: GitHubApi, owner: str, repo: str) -> set[str] | None:
    """Return the names of the labels already in the repository.

    `None` means the listing failed; callers treat it as an empty set.
    """

    try:
        labels = await client.request(labels_path(owner, repo))
    except ApiError as exc:
        logger.warning("Could not fetch existing labels: %s", exc)
        return None
    if not isinstance(labels, list):
        logger.warning("Unexpected labels payload (%s); assuming none exist", type(labels).__name__)
        return None
    return {label["name"] for label in labels if isinstance(label, dict) and "name" in label}


async def create_label(client: GitHubApi, label: LabelDefinition, owner: str, repo: str) -> None:
    try:
        await client.request(labels_path(owner, repo), "POST", label.to_payload())
    except ApiError as exc:
        raise LabelProvisionError(
            exc.message, status_code=exc.status_code, error_codes=exc.error_codes
        ) from exc


async def ensure_labels(
    client: GitHubApi,
    owner: str,
    repo: str,
    *,
    pacing: PacingPolicy | None = None,
    catalog: Iterable[LabelDefinition] = LABEL_CATALOG,
    dry_run: bool = False,
    on_created: Callable[[LabelDefinition], None] | None = None,
) -> LabelReport:
    pacing = pacing or PacingPolicy()
    report = LabelReport()

    logger.info("Setting up labels...")
    existing = await get_existing_labels(client, owner, repo)
    if existing is None:
        report.listing_failed = True
        existing = set()

    for label in catalog:
        if label.name in existing:
            report.existing.append(label.name)
            continue
        if dry_run:
            report.planned.append(label.name)
            continue

        try:
            await create_label(client, label, owner, repo)
        except LabelProvisionError as exc:
            if exc.already_exists:
                logger.info("Label already exists: %s", label.name)
                report.already_existed.append(label.name)
            else:
                logger.error("Failed to create label %s: %s", label.name, exc)
                report.failed.append(label.name)
        else:
            logger.info("Created label: %s", label.name)
            report.created.append(label.name)
            if on_created:
                on_created(label)
        await pacing.after_label()

    return report
