from __future__ import annotations

from pathlib import Path

import pytest

MAINTAINER = "Jane Doe <jane@example.com>"


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside tmp_path with no user config and a fixed git identity."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.setattr("go_makepkg.config.git_maintainer", lambda *a, **k: MAINTAINER)
    return tmp_path


def write_file(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path
