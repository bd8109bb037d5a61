"""Label catalog and per-row label derivation.

The catalog is constant data: it is provisioned into the target repository
before any issue is created, so every label produced by `derive_labels` for
the recognised difficulty/priority/component values already exists.
"""

from __future__ import annotations

from typing import Iterable

from core.domain.models import IssueDescriptor, LabelDefinition

BASELINE_LABEL = "hacktoberfest"
BUG_LABEL = "bug"
GOOD_FIRST_ISSUE_LABEL = "good first issue"

LABEL_CATALOG: tuple[LabelDefinition, ...] = (
    # Difficulty
    LabelDefinition(name="difficulty:easy", color="0e8a16", description="Good for newcomers"),
    LabelDefinition(name="difficulty:medium", color="fbca04", description="Moderate complexity"),
    LabelDefinition(name="difficulty:hard", color="d93f0b", description="Complex implementation required"),
    # Priority
    LabelDefinition(name="priority:high", color="b60205", description="High priority issue"),
    LabelDefinition(name="priority:medium", color="fbca04", description="Medium priority issue"),
    LabelDefinition(name="priority:low", color="0e8a16", description="Low priority issue"),
    # Component
    LabelDefinition(name="component:testing", color="006b75", description="Testing related"),
    LabelDefinition(name="component:core", color="1d76db", description="Core functionality"),
    LabelDefinition(name="component:ui", color="e99695", description="User interface"),
    LabelDefinition(name="component:store", color="f9d0c4", description="State management"),
    LabelDefinition(name="component:service", color="fef2c0", description="Service layer"),
    LabelDefinition(name="component:animation", color="c2e0c6", description="Animation system"),
    # Type
    LabelDefinition(name="enhancement", color="84b6eb", description="New feature or improvement"),
    LabelDefinition(name=BUG_LABEL, color="d73a4a", description="Something isn't working"),
    LabelDefinition(name=GOOD_FIRST_ISSUE_LABEL, color="7057ff", description="Good for newcomers"),
    LabelDefinition(name=BASELINE_LABEL, color="ff6b35", description="Hacktoberfest eligible"),
    # Utility
    LabelDefinition(name="accessibility", color="0e8a16", description="Accessibility improvements"),
    LabelDefinition(name="performance", color="fbca04", description="Performance related"),
    LabelDefinition(name="documentation", color="0075ca", description="Documentation improvements"),
)


def split_label_field(value: str) -> list[str]:
    """Split the comma-separated `Labels` column, dropping empty tokens."""

    return [token.strip() for token in value.split(",") if token.strip()]


def dedupe_labels(labels: Iterable[str]) -> list[str]:
    """Remove duplicated and empty labels keeping the first occurrence."""

    seen: set[str] = set()
    deduped: list[str] = []
    for label in labels:
        if not label or label in seen:
            continue
        seen.add(label)
        deduped.append(label)
    return deduped


def derive_labels(issue: IssueDescriptor) -> list[str]:
    labels = [BASELINE_LABEL]
    if issue.labels:
        labels.extend(split_label_field(issue.labels))
    if issue.difficulty:
        labels.append(f"difficulty:{issue.difficulty.lower()}")
    if issue.component:
        labels.append(f"component:{issue.component.lower()}")
    if issue.priority:
        labels.append(f"priority:{issue.priority.lower()}")
    if issue.type == "Bug":
        labels.append(BUG_LABEL)
    if issue.difficulty == "Easy":
        labels.append(GOOD_FIRST_ISSUE_LABEL)
    return dedupe_labels(labels)
