"""Tests for core.domain.labels: the catalog and per-row label derivation."""

from __future__ import annotations

import pytest

from core.domain.labels import (
    BASELINE_LABEL,
    BUG_LABEL,
    GOOD_FIRST_ISSUE_LABEL,
    LABEL_CATALOG,
    dedupe_labels,
    derive_labels,
    split_label_field,
)
from core.domain.models import IssueDescriptor


def _issue(**row: str) -> IssueDescriptor:
    return IssueDescriptor.from_row(row)


class TestCatalog:
    def test_names_are_unique(self) -> None:
        names = [label.name for label in LABEL_CATALOG]
        assert len(names) == len(set(names)) == 19

    def test_catalog_covers_fixed_labels(self) -> None:
        names = {label.name for label in LABEL_CATALOG}
        assert {BASELINE_LABEL, BUG_LABEL, GOOD_FIRST_ISSUE_LABEL} <= names

    def test_catalog_is_immutable(self) -> None:
        with pytest.raises(Exception):
            LABEL_CATALOG[0].name = "changed"  # type: ignore[misc]

    def test_declaration_order_starts_with_difficulty(self) -> None:
        assert [label.name for label in LABEL_CATALOG[:3]] == [
            "difficulty:easy",
            "difficulty:medium",
            "difficulty:hard",
        ]


class TestDeriveLabels:
    def test_baseline_only(self) -> None:
        assert derive_labels(_issue(Title="x")) == [BASELINE_LABEL]

    def test_full_row_order(self) -> None:
        issue = _issue(
            Title="x",
            Labels="frontend, auth",
            Difficulty="Medium",
            Component="UI",
            Priority="High",
            Type="Feature",
        )
        assert derive_labels(issue) == [
            BASELINE_LABEL,
            "frontend",
            "auth",
            "difficulty:medium",
            "component:ui",
            "priority:high",
        ]

    def test_easy_adds_good_first_issue(self) -> None:
        labels = derive_labels(_issue(Title="x", Difficulty="Easy"))
        assert "difficulty:easy" in labels
        assert GOOD_FIRST_ISSUE_LABEL in labels

    def test_easy_is_case_sensitive_for_good_first_issue(self) -> None:
        labels = derive_labels(_issue(Title="x", Difficulty="easy"))
        assert "difficulty:easy" in labels
        assert GOOD_FIRST_ISSUE_LABEL not in labels

    @pytest.mark.parametrize("kind", ["Bug"])
    def test_bug_type_adds_bug_label(self, kind: str) -> None:
        assert BUG_LABEL in derive_labels(_issue(Title="x", Type=kind))

    @pytest.mark.parametrize("kind", ["Feature", "bug", "BUG", ""])
    def test_other_types_never_add_bug_label(self, kind: str) -> None:
        assert BUG_LABEL not in derive_labels(_issue(Title="x", Type=kind))

    def test_duplicates_and_empty_tokens_are_dropped(self) -> None:
        labels = derive_labels(
            _issue(Title="x", Labels="bug, ,hacktoberfest,,bug", Type="Bug", Difficulty="Easy")
        )
        assert labels.count(BUG_LABEL) == 1
        assert labels.count(BASELINE_LABEL) == 1
        assert "" not in labels

    def test_token_order_does_not_change_the_set(self) -> None:
        first = derive_labels(_issue(Title="x", Labels="a, b, c", Priority="Low"))
        second = derive_labels(_issue(Title="x", Labels="c,a ,b", Priority="Low"))
        assert set(first) == set(second)


class TestHelpers:
    def test_split_label_field(self) -> None:
        assert split_label_field(" a, ,b ,") == ["a", "b"]

    def test_dedupe_keeps_first_occurrence(self) -> None:
        assert dedupe_labels(["b", "a", "", "b"]) == ["b", "a"]

    def test_descriptor_ignores_unknown_headers(self) -> None:
        issue = IssueDescriptor.from_row({"Title": "x", "Assignee": "octocat"})
        assert issue.title == "x"
        assert issue.description == ""
        assert not hasattr(issue, "Assignee")

    def test_lowercase_headers_are_not_recognised(self) -> None:
        issue = IssueDescriptor.from_row({"title": "lower", "type": "Bug", "labels": "x"})
        assert issue.title == ""
        assert issue.type == ""
        assert issue.labels == ""
        assert not issue.has_title

    def test_whitespace_title_has_no_title(self) -> None:
        assert not IssueDescriptor.from_row({"Title": "   "}).has_title
