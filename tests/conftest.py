from __future__ import annotations

import tempfile
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_tempdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the system temp directory and config lookup at a scratch dir."""
    signal_dir = tmp_path / "tmp"
    signal_dir.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(signal_dir))
    monkeypatch.setattr("fscancel.config.DEFAULT_CONFIG_FILE", tmp_path / "absent.yaml")
    for name in ("FSCANCEL_THROTTLE_MS", "FSCANCEL_FILE_PREFIX", "FSCANCEL_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    return signal_dir
