# ruff: noqa: E402

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import zen_commit.log as zen_log


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.delenv("ZEN_COMMIT_CONFIG", raising=False)
    monkeypatch.delenv("ZEN_COMMIT_LOG_LEVEL", raising=False)
    monkeypatch.setattr(zen_log, "_configured_level", None)
    monkeypatch.setattr(zen_log, "_no_color_override", None)
    monkeypatch.setattr("zen_commit.paths.data_dir", lambda: tmp_path / "data")
