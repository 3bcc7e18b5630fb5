"""
config.py

Responsibility: Load user defaults for the command-line flags.

Two sources feed the defaults shown in `--help`:
- an optional YAML file (`--config PATH`, or `$XDG_CONFIG_HOME/go-makepkg/config.yaml`)
- the global git identity, used as the default maintainer

Command-line flags always win over both.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from go_makepkg.errors import ConfigError
from go_makepkg.logging import get_logger

logger = get_logger("config")

CONFIG_FILENAME = "config.yaml"

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass(frozen=True)
class Defaults:
    """Default values for the valued command-line flags."""

    maintainer: str = ""
    license: str = "GPL"
    release: str = "1"
    directory: str = "build"
    output: str = "PKGBUILD"
    depends: tuple[str, ...] = field(default_factory=tuple)
    makedepends: tuple[str, ...] = field(default_factory=tuple)


_STRING_KEYS = ("maintainer", "license", "release", "directory", "output")
_LIST_KEYS = ("depends", "makedepends")


def parse_comma_list(value: str | None) -> tuple[str, ...]:
    """Split a comma-separated list, dropping empty items."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def default_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "go-makepkg" / CONFIG_FILENAME


def _as_list(key: str, raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return parse_comma_list(raw)
    if isinstance(raw, list) and all(isinstance(item, (str, int, float)) for item in raw):
        return tuple(str(item).strip() for item in raw if str(item).strip())
    raise ConfigError(f"`{key}` must be a list or a comma-separated string.")


def load_config(path: str | Path) -> dict[str, Any]:
    """
    Parse a YAML defaults file into a mapping of `Defaults` field overrides.

    Recognized keys:
    - maintainer, license, release, directory, output: str
    - depends, makedepends: list of str or comma-separated str
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise ConfigError(f"Config file does not exist: {cfg_path}")
    try:
        data = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file is not valid YAML: {cfg_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("Config file must be a mapping/object at the top level.")

    unknown = sorted(str(k) for k in data if k not in _STRING_KEYS + _LIST_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys in {cfg_path}: {', '.join(unknown)}")

    out: dict[str, Any] = {}
    for key in _STRING_KEYS:
        if data.get(key) is None:
            continue
        if isinstance(data[key], (dict, list)):
            raise ConfigError(f"`{key}` must be a string.")
        out[key] = str(data[key]).strip()
    for key in _LIST_KEYS:
        if key in data:
            out[key] = _as_list(key, data[key])

    logger.debug("Loaded defaults from %s: %s", cfg_path, ", ".join(sorted(out)))
    return out


def _git_config(key: str, runner: Runner) -> str:
    result = runner(
        ["git", "config", "--global", key],
        check=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
    )
    return result.stdout.strip()


def git_maintainer(runner: Runner = subprocess.run) -> str:
    """
    Return `Name <email>` from the global git identity, or "" when unavailable.
    """
    try:
        name = _git_config("user.name", runner)
        email = _git_config("user.email", runner)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("No git identity available: %s", e)
        return ""
    if not name:
        return ""
    return f"{name} <{email}>"


def resolve_defaults(
    config_path: str | Path | None = None,
    *,
    runner: Runner = subprocess.run,
) -> Defaults:
    """
    Merge built-in defaults, the git identity and the YAML defaults file.

    An explicit `config_path` must exist; the per-user file is only read when present.
    """
    overrides: dict[str, Any] = {}
    if config_path is not None:
        overrides = load_config(config_path)
    else:
        user_path = default_config_path()
        if user_path.is_file():
            overrides = load_config(user_path)

    if "maintainer" not in overrides:
        overrides["maintainer"] = git_maintainer(runner)

    return Defaults(**overrides)
