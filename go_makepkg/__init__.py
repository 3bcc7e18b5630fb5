"""
go_makepkg package

This package implements go-makepkg, a PKGBUILD generator for Go programs.

Key responsibilities are split across modules:
- `repo_url.py`: normalize the repository URL and derive the package name
- `collector.py`: hash local files to include in the package, compute backups
- `renderer.py`: render the PKGBUILD and systemd unit templates
- `writer.py`: create the build directory and stage files into it
- `makepkg.py`: run `makepkg` and clean up its leftovers
- `cli.py`: CLI entrypoint and orchestration (parse -> collect -> render -> build)
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "3.1"
