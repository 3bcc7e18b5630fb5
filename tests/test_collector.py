"""File collection and backup list tests."""

from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from go_makepkg.collector import backup_list, collect_files, file_hash
from go_makepkg.errors import CollectError
from go_makepkg.models import PackageFile
from tests.conftest import write_file


def test_backup_contains_only_etc_files(workdir: Path) -> None:
    write_file(workdir / "etc/app/config.conf", "key = value\n")
    write_file(workdir / "README", "readme\n")

    files = collect_files(["etc/app/config.conf", "README"], "build")

    assert [f.path for f in files] == ["etc/app/config.conf", "README"]
    assert backup_list(files) == ["etc/app/config.conf"]


def test_directories_are_skipped(workdir: Path) -> None:
    (workdir / "docs").mkdir()
    write_file(workdir / "README", "readme\n")

    files = collect_files(["docs", "README"], "build")

    assert [f.name for f in files] == ["README"]


def test_missing_file_is_fatal(workdir: Path) -> None:
    with pytest.raises(CollectError, match="does-not-exist"):
        collect_files(["does-not-exist"], "build")


def test_generated_files_are_skipped(workdir: Path) -> None:
    write_file(workdir / "PKGBUILD", "old\n")
    write_file(workdir / "build/PKGBUILD", "old\n")
    write_file(workdir / "build/config.conf", "old\n")
    write_file(workdir / "buildscript.sh", "#!/bin/sh\n")

    files = collect_files(
        ["PKGBUILD", "build/PKGBUILD", "build/config.conf", "buildscript.sh"],
        "build",
    )

    assert [f.path for f in files] == ["buildscript.sh"]


def test_custom_script_name_is_skipped(workdir: Path) -> None:
    write_file(workdir / "PKGBUILD.go", "old\n")
    write_file(workdir / "PKGBUILD", "kept\n")

    files = collect_files(["PKGBUILD.go", "PKGBUILD"], "out", script_name="PKGBUILD.go")

    assert [f.path for f in files] == ["PKGBUILD"]


def test_entries_record_base_name_and_md5(workdir: Path) -> None:
    write_file(workdir / "etc/app/config.conf", "key = value\n")

    (entry,) = collect_files(["./etc/app/config.conf"], "build")

    assert entry == PackageFile(
        path="etc/app/config.conf",
        name="config.conf",
        hash=hashlib.md5(b"key = value\n").hexdigest(),
    )


def test_file_hash_matches_hashlib(tmp_path: Path) -> None:
    data = b"x" * (3 * 1024 * 1024 + 7)
    target = tmp_path / "blob"
    target.write_bytes(data)
    assert file_hash(target) == hashlib.md5(data).hexdigest()


def test_install_path_keeps_system_layout() -> None:
    config = PackageFile(path="etc/app/config.conf", name="config.conf", hash="0")
    helper = PackageFile(path="helper.sh", name="helper.sh", hash="0")

    assert config.install_path == "etc/app/config.conf"
    assert config.mode == "0644"
    assert helper.install_path == "usr/bin/helper.sh"
    assert helper.mode == "0755"


def test_duplicate_base_names_are_fatal(workdir: Path) -> None:
    write_file(workdir / "etc/a/app.conf", "AAA\n")
    write_file(workdir / "etc/b/app.conf", "BBB\n")

    with pytest.raises(CollectError, match="Duplicate file name in package: app.conf"):
        collect_files(["etc/a/app.conf", "etc/b/app.conf"], "build")
