"""Tests for the development launchers (`main.py` and `src/main.py`)."""

from __future__ import annotations

import runpy
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]


@pytest.mark.parametrize("launcher", [ROOT / "main.py", ROOT / "src" / "main.py"])
def test_launcher_runs_cli(
    launcher: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", [str(launcher), "labels"])
    monkeypatch.setattr(sys, "path", list(sys.path))

    with pytest.raises(SystemExit) as excinfo:
        runpy.run_path(str(launcher), run_name="__main__")

    assert excinfo.value.code in (0, None)
    assert "good first issue" in capsys.readouterr().out
