from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fscancel.cli import app
from fscancel.token import CancellationToken

runner = CliRunner()


def test_new_prints_descriptor_without_creating_file(isolated_tempdir: Path) -> None:
    result = runner.invoke(app, ["new", "build-42"])

    assert result.exit_code == 0, result.output
    descriptor = json.loads(result.output)
    assert descriptor == {
        "filePath": os.path.join(tempfile.gettempdir(), "tsc-build-42"),
        "isCancelled": False,
    }
    assert list(isolated_tempdir.iterdir()) == []


def test_new_without_identity_is_random() -> None:
    first = json.loads(runner.invoke(app, ["new"]).output)
    second = json.loads(runner.invoke(app, ["new"]).output)
    assert first["filePath"] != second["filePath"]


def test_cancel_status_cleanup_by_identity() -> None:
    token = CancellationToken("cli-job")

    result = runner.invoke(app, ["status", "cli-job", "--exit-code"])
    assert result.exit_code == 1
    assert "not cancelled" in result.output

    result = runner.invoke(app, ["cancel", "cli-job"])
    assert result.exit_code == 0, result.output
    assert os.path.exists(token.file_path)

    result = runner.invoke(app, ["status", "cli-job", "--exit-code"])
    assert result.exit_code == 0
    assert "cancelled" in result.output
    assert "not cancelled" not in result.output

    result = runner.invoke(app, ["cleanup", "cli-job"])
    assert result.exit_code == 0, result.output
    assert not os.path.exists(token.file_path)

    # second cleanup is a no-op
    assert runner.invoke(app, ["cleanup", "cli-job"]).exit_code == 0


def test_commands_accept_json_descriptor() -> None:
    descriptor = runner.invoke(app, ["new"]).output.strip()
    token = CancellationToken.from_json(descriptor)

    result = runner.invoke(app, ["cancel", descriptor])
    assert result.exit_code == 0, result.output
    assert token.is_cancellation_requested()


def test_invalid_descriptor_exits_with_error() -> None:
    result = runner.invoke(app, ["status", '{"filePath": "relative"}'])
    assert result.exit_code == 1
    assert "Invalid token descriptor" in result.output


def test_invalid_identity_exits_with_error() -> None:
    result = runner.invoke(app, ["cancel", "../escape"])
    assert result.exit_code == 1
    assert "Invalid token identity" in result.output


def test_config_option_sets_prefix(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("cancellation:\n  file_prefix: ci-\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config_path), "new", "job"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["filePath"].endswith(f"{os.sep}ci-job")


def test_missing_config_file_exits_with_error(tmp_path: Path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.yaml"), "new"])
    assert result.exit_code == 1
    assert "Failed to load config" in result.output


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("FSCANCEL_THROTTLE_MS", "abc"),
        ("FSCANCEL_THROTTLE_MS", "-1"),
        ("FSCANCEL_FILE_PREFIX", "a/b"),
    ],
)
def test_bad_env_config_exits_with_error(
    monkeypatch: pytest.MonkeyPatch, name: str, value: str
) -> None:
    monkeypatch.setenv(name, value)
    result = runner.invoke(app, ["new"])
    assert result.exit_code == 1
    assert "Failed to load config" in result.output


def test_non_mapping_config_section_exits_with_error(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("cancellation: 5\n", encoding="utf-8")

    result = runner.invoke(app, ["--config", str(config_path), "new"])

    assert result.exit_code == 1
    assert "Failed to load config" in result.output
