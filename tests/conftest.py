"""Pytest configuration and fixtures for csv-issues tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import AppSettings
from core.services.pacing import PacingPolicy
from tests.helpers import FakeGitHubApi, SleepRecorder


@pytest.fixture
def fake_api() -> FakeGitHubApi:
    return FakeGitHubApi()


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def no_pacing(sleeps: SleepRecorder) -> PacingPolicy:
    return PacingPolicy.none(sleep=sleeps)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> AppSettings:
    """Settings isolated from the developer's env and .env files."""

    for name in ("GITHUB_TOKEN", "CSV_FILE", "CSV_ISSUES_GITHUB_TOKEN", "CSV_ISSUES_CSV_FILE"):
        monkeypatch.delenv(name, raising=False)
    return AppSettings(
        _env_file=None,
        github_token="test-token",
        label_delay_seconds=0,
        issue_delay_seconds=0,
    )


@pytest.fixture
def issues_csv(tmp_path: Path) -> Path:
    path = tmp_path / "issues.csv"
    path.write_text(
        "Title,Description,Priority,Type,Labels,Difficulty,Component\n"
        '"Fix login","Login fails on Safari","High","Bug","frontend, auth","Easy","UI"\n'
        '"Add dashboard","New stats page","Medium","Feature","","Medium","Core"\n'
        '"   ","whitespace title is skipped","Low","Feature","","",""\n'
        '"Broken row","only two fields"\n'
        '"Write docs","Document the CLI","Low","Docs","documentation","",""\n',
        encoding="utf-8",
    )
    return path
