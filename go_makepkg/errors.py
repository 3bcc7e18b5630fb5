"""
errors.py

Responsibility: exception hierarchy shared by all go-makepkg modules.

The CLI catches `GoMakepkgError` and turns it into a non-zero exit status;
anything else is a bug and propagates with a traceback.
"""

from __future__ import annotations


class GoMakepkgError(RuntimeError):
    """Base exception for all go-makepkg errors."""


class ConfigError(GoMakepkgError, ValueError):
    """Raised when the defaults file is malformed."""


class RepoURLError(GoMakepkgError, ValueError):
    """Raised when the repository URL cannot be parsed."""


class CollectError(GoMakepkgError):
    """Raised when a file to include in the package cannot be read."""


class RenderError(GoMakepkgError):
    """Raised when a template fails to render."""


class WriteError(GoMakepkgError):
    """Raised when the build directory or its files cannot be written."""


class BuildError(GoMakepkgError):
    """Raised when `makepkg` cannot be started or exits with an error."""
