"""Logging utilities for go-makepkg.

Output mimics makepkg itself: steps are printed as ``==> message`` and
sub-steps (``extra={"substep": True}``) as ``  -> message``.
"""

from __future__ import annotations

import logging
from typing import IO

_LOGGER_NAME = "go_makepkg"

_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"
_COLORS = {
    "step": "\x1b[1;32m",
    "substep": "\x1b[1;34m",
    "warning": "\x1b[1;33m",
    "error": "\x1b[1;31m",
}


class StepFormatter(logging.Formatter):
    """Format records as makepkg-style ``==>`` / ``  ->`` lines."""

    def __init__(self, *, color: bool = False) -> None:
        super().__init__()
        self.color = color

    def _paint(self, kind: str, text: str) -> str:
        if not self.color:
            return text
        return f"{_COLORS[kind]}{text}{_RESET}{_BOLD}"

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.ERROR:
            line = f"{self._paint('error', '==> ERROR:')} {message}"
        elif record.levelno >= logging.WARNING:
            line = f"{self._paint('warning', '==> WARNING:')} {message}"
        elif getattr(record, "substep", False):
            line = f"  {self._paint('substep', '->')} {message}"
        else:
            line = f"{self._paint('step', '==>')} {message}"
        if self.color:
            line = f"{line}{_RESET}"
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the go_makepkg hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(*, verbose: bool = False, stream: IO[str] | None = None) -> logging.Logger:
    """Configure the go_makepkg logger with a single makepkg-style console handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when main() runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    isatty = getattr(handler.stream, "isatty", None)
    handler.setFormatter(StepFormatter(color=bool(isatty and isatty())))
    logger.addHandler(handler)

    return logger


__all__ = ["StepFormatter", "configure_logging", "get_logger"]
