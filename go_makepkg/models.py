"""
models.py

Responsibility: immutable records passed between collection and rendering.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from urllib.parse import urlsplit

BIN_DIR = "usr/bin"
SYSTEMD_UNIT_DIR = "usr/lib/systemd/system"


@dataclass(frozen=True)
class PackageFile:
    """A local file included in the package.

    `path` is the path as given on the command line, laid out the way the
    file is installed on the system (e.g. `etc/app/config.conf`); `name` is
    the file's name inside the build directory.
    """

    path: str
    name: str
    hash: str

    @property
    def install_path(self) -> str:
        # Bare file names have no system location; ship them as helper executables.
        if posixpath.dirname(self.path):
            return self.path
        return posixpath.join(BIN_DIR, self.name)

    @property
    def mode(self) -> str:
        return "0755" if self.install_path.startswith(BIN_DIR + "/") else "0644"


@dataclass(frozen=True)
class PackageData:
    """Everything the PKGBUILD template needs."""

    maintainer: str
    pkgname: str
    pkgrel: str
    pkgdesc: str
    repo_url: str
    license: str
    files: tuple[PackageFile, ...] = field(default_factory=tuple)
    backup: tuple[str, ...] = field(default_factory=tuple)
    depends: tuple[str, ...] = field(default_factory=tuple)
    makedepends: tuple[str, ...] = field(default_factory=tuple)
    wildcard_build: bool = False
    version_var: str | None = None

    @property
    def source_url(self) -> str:
        """Repository URL with the VCS prefix makepkg needs to clone it."""
        scheme = urlsplit(self.repo_url).scheme
        if scheme == "git" or scheme.startswith("git+"):
            return self.repo_url
        return f"git+{self.repo_url}"


@dataclass(frozen=True)
class ServiceData:
    """Fields of the generated systemd unit."""

    description: str
    exec_name: str
