from __future__ import annotations

from pathlib import Path

import pytest

from fscancel.fs import LocalFileSystem, MemoryFileSystem


@pytest.mark.parametrize("fs_factory", [LocalFileSystem, MemoryFileSystem])
def test_create_exists_delete(fs_factory, tmp_path) -> None:
    fs = fs_factory()
    path = str(tmp_path / "signal")

    assert not fs.exists(path)
    fs.create(path)
    fs.create(path)
    assert fs.exists(path)
    fs.delete(path)
    assert not fs.exists(path)

    with pytest.raises(FileNotFoundError):
        fs.delete(path)


def test_local_create_truncates(tmp_path: Path) -> None:
    path = tmp_path / "signal"
    path.write_text("stale", encoding="utf-8")
    LocalFileSystem().create(str(path))
    assert path.read_text(encoding="utf-8") == ""


def test_memory_paths_snapshot() -> None:
    fs = MemoryFileSystem({"/tmp/a"})
    fs.create("/tmp/b")
    assert fs.paths == frozenset({"/tmp/a", "/tmp/b"})
