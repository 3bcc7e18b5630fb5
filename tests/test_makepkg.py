"""makepkg invocation tests."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from go_makepkg.errors import BuildError
from go_makepkg.makepkg import clean_up, makepkg_command, run_makepkg


def test_makepkg_command() -> None:
    assert makepkg_command() == ["makepkg", "-f"]
    assert makepkg_command(clean=True) == ["makepkg", "-f", "-c"]


def test_run_makepkg_runs_in_build_dir(tmp_path: Path) -> None:
    calls = []

    def runner(cmd, **kwargs):
        calls.append((list(cmd), kwargs))
        return subprocess.CompletedProcess(cmd, 0)

    run_makepkg(tmp_path, clean=True, runner=runner)

    assert calls == [(["makepkg", "-f", "-c"], {"cwd": str(tmp_path), "check": True})]


def test_run_makepkg_failure(tmp_path: Path) -> None:
    def runner(cmd, **kwargs):
        raise subprocess.CalledProcessError(4, cmd)

    with pytest.raises(BuildError, match="exit code 4"):
        run_makepkg(tmp_path, runner=runner)


def test_run_makepkg_missing_binary(tmp_path: Path) -> None:
    def runner(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", "makepkg")

    with pytest.raises(BuildError, match="Cannot run makepkg"):
        run_makepkg(tmp_path, runner=runner)


def test_clean_up_removes_clone(tmp_path: Path) -> None:
    (tmp_path / "bar" / "objects").mkdir(parents=True)
    (tmp_path / "PKGBUILD").write_text("", encoding="utf-8")

    clean_up(tmp_path, "bar")

    assert not (tmp_path / "bar").exists()
    assert (tmp_path / "PKGBUILD").exists()


def test_clean_up_without_clone(tmp_path: Path) -> None:
    clean_up(tmp_path, "bar")
