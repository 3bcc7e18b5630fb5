"""
collector.py

Responsibility: decide which local files go into the package and hash them.

Files are expected to be stored by the path they are installed at, e.g.
`etc/app/config.conf`. Directories, the generated build script and anything
already inside the build directory are skipped so repeated runs over `**/*`
do not include their own output.
"""

from __future__ import annotations

import hashlib
import posixpath
from pathlib import Path
from typing import Iterable

from go_makepkg.errors import CollectError
from go_makepkg.logging import get_logger
from go_makepkg.models import PackageFile

logger = get_logger("collector")

BACKUP_PREFIX = "etc/"


def file_hash(path: str | Path) -> str:
    """Return the MD5 hex digest makepkg expects in `md5sums`."""
    h = hashlib.md5()
    try:
        with Path(path).open("rb") as f:
            for blk in iter(lambda: f.read(1024 * 1024), b""):
                h.update(blk)
    except OSError as e:
        raise CollectError(f"Cannot read {path}: {e}") from e
    return h.hexdigest()


def _is_inside(path: Path, directory: Path) -> bool:
    try:
        path.resolve().relative_to(directory.resolve())
    except ValueError:
        return False
    return True


def _clean(name: str) -> str:
    cleaned = posixpath.normpath(name.replace("\\", "/"))
    return cleaned[2:] if cleaned.startswith("./") else cleaned


def collect_files(
    names: Iterable[str],
    out_dir: str | Path,
    *,
    script_name: str = "PKGBUILD",
) -> list[PackageFile]:
    out = Path(out_dir)
    files: list[PackageFile] = []
    seen: dict[str, str] = {}

    for name in names:
        path = Path(name)
        if not path.exists():
            raise CollectError(f"File does not exist: {name}")

        if path.is_dir():
            logger.debug("Skipping directory: %s", name)
            continue

        if name == script_name or _clean(name) == script_name:
            continue

        if _is_inside(path, out):
            logger.debug("Skipping file from build directory: %s", name)
            continue

        # Files are staged flat into the build directory by base name.
        if path.name in seen:
            raise CollectError(
                f"Duplicate file name in package: {path.name} ({seen[path.name]} and {name})"
            )
        seen[path.name] = name

        files.append(PackageFile(path=_clean(name), name=path.name, hash=file_hash(path)))

    return files


def backup_list(files: Iterable[PackageFile]) -> list[str]:
    """Paths of files installed under /etc, preserved by pacman on upgrade."""
    logger.info("Checking backup files...")
    backup = []
    for f in files:
        if f.path.startswith(BACKUP_PREFIX):
            logger.info("Adding to backup: %s", f.path, extra={"substep": True})
            backup.append(f.path)
    return backup
