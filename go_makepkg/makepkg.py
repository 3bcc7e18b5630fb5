"""
makepkg.py

Responsibility: run `makepkg` in the build directory and remove its leftovers.

makepkg inherits our stdin/stdout/stderr: it may ask for a sudo password
or a confirmation, so its output is never captured.
"""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Callable

from go_makepkg.errors import BuildError
from go_makepkg.logging import get_logger

logger = get_logger("makepkg")

MAKEPKG = "makepkg"

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]


def makepkg_command(*, clean: bool = False) -> list[str]:
    cmd = [MAKEPKG, "-f"]
    if clean:
        cmd.append("-c")
    return cmd


def run_makepkg(out_dir: str | Path, *, clean: bool = False, runner: Runner = subprocess.run) -> None:
    """
    Build the package with `makepkg -f` (plus `-c` when cleaning), raising BuildError on failure.
    """
    logger.info("Running makepkg...")
    cmd = makepkg_command(clean=clean)
    logger.debug("Running command: %s (cwd=%s)", " ".join(cmd), out_dir)
    try:
        runner(cmd, cwd=str(out_dir), check=True)
    except FileNotFoundError as e:
        raise BuildError(f"Cannot run {MAKEPKG}: {e}") from e
    except subprocess.CalledProcessError as e:
        raise BuildError(f"Command failed with exit code {e.returncode}: {' '.join(cmd)}") from e
    except OSError as e:
        raise BuildError(f"Cannot run {MAKEPKG}: {e}") from e


def clean_up(out_dir: str | Path, pkgname: str) -> None:
    """Remove the clone makepkg leaves in `<out_dir>/<pkgname>`."""
    target = Path(out_dir) / pkgname
    logger.info("Cleaning up %s...", target)
    try:
        shutil.rmtree(target)
    except FileNotFoundError:
        return
    except OSError as e:
        raise BuildError(f"Cannot remove {target}: {e}") from e
