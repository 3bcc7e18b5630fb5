"""
writer.py

Responsibility: all writes into the build directory.

Rules:
- The build directory is never reused silently; pass `overwrite=True` to
  write into an existing one.
- Local files are staged by hard link. A destination that already exists is
  left untouched (link-or-skip), so staging is idempotent.
- Across filesystems a hard link is impossible; the file is copied instead.
"""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path
from typing import Iterable

from go_makepkg.errors import WriteError
from go_makepkg.logging import get_logger
from go_makepkg.models import PackageFile

logger = get_logger("writer")

GITIGNORE_NAME = ".gitignore"


def create_output_dir(path: str | Path, *, overwrite: bool = False) -> Path:
    out = Path(path)
    if out.exists() and not out.is_dir():
        raise WriteError(f"Output path exists and is not a directory: {out}")
    if out.is_dir():
        if not overwrite:
            raise WriteError(f"Output directory already exists: {out} (use --overwrite to allow)")
        return out
    try:
        out.mkdir(mode=0o755, parents=True)
    except OSError as e:
        raise WriteError(f"Cannot create output directory {out}: {e}") from e
    return out


def _link_or_skip(src: Path, dst: Path) -> bool:
    """Stage `src` as `dst`; return False when `dst` is already present."""
    try:
        os.link(src, dst)
    except FileExistsError:
        return False
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        # Exclusive create keeps the skip semantics for the copy fallback.
        try:
            with src.open("rb") as fsrc, dst.open("xb") as fdst:
                shutil.copyfileobj(fsrc, fdst)
        except FileExistsError:
            return False
        shutil.copystat(src, dst)
    return True


def stage_files(files: Iterable[PackageFile], out_dir: str | Path) -> list[str]:
    """Link every package file into the build directory under its base name."""
    logger.info("Preparing local files...")
    out = Path(out_dir)
    staged: list[str] = []
    for f in files:
        logger.info("Including file in the package: %s", f.path, extra={"substep": True})
        try:
            if _link_or_skip(Path(f.path), out / f.name):
                staged.append(f.name)
            else:
                logger.debug("Already staged, leaving as is: %s", out / f.name)
        except OSError as e:
            raise WriteError(f"Cannot stage {f.path} into {out}: {e}") from e
    return staged


def write_text(path: str | Path, content: str) -> Path:
    dst = Path(path)
    try:
        dst.write_text(content, encoding="utf-8", newline="\n")
    except OSError as e:
        raise WriteError(f"Cannot write {dst}: {e}") from e
    return dst


def gitignore_content(pkgname: str) -> str:
    ignore = ["/*.tar.xz", "/pkg", "/src", f"/{pkgname}"]
    return "\n".join(ignore) + "\n"


def write_gitignore(out_dir: str | Path, pkgname: str) -> Path:
    logger.info("Creating .gitignore...")
    return write_text(Path(out_dir) / GITIGNORE_NAME, gitignore_content(pkgname))
