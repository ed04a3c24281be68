from __future__ import annotations

from pathlib import Path

import pytest

from imagify.errors import DirectoryError
from imagify.pipeline.output import ensure_output_dir, resolve_output_dir


def test_explicit_path_is_used_verbatim(tmp_path: Path) -> None:
    explicit = tmp_path / "custom" / "out"
    assert resolve_output_dir(explicit, "whatever/report.pdf") == explicit


def test_default_is_source_stem_under_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert resolve_output_dir(None, "/data/inbox/report.pdf") == tmp_path / "report"


def test_default_normalises_backslashes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert resolve_output_dir(None, r"C:\scans\march.report.pdf") == tmp_path / "march.report"


def test_ensure_output_dir_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"
    assert ensure_output_dir(target) == target
    assert target.is_dir()
    # Existing directories are accepted.
    assert ensure_output_dir(target) == target


def test_ensure_output_dir_rejects_files(tmp_path: Path) -> None:
    blocker = tmp_path / "taken"
    blocker.write_text("not a directory", encoding="utf-8")
    with pytest.raises(DirectoryError):
        ensure_output_dir(blocker)


def test_ensure_output_dir_wraps_os_errors(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(DirectoryError) as excinfo:
        ensure_output_dir(blocker / "child")
    assert isinstance(excinfo.value.__cause__, OSError)
