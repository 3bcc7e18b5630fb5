"""
repo_url.py

Responsibility: turn the `<repo>` argument into a URL makepkg can clone.

Rules:
- A trailing `/...` (go tooling's "all sub-packages" marker) is stripped and
  reported as a wildcard build.
- `ssh://` and `ssh+git://` become `git+ssh://`.
- SCP-style `host:path` (with or without a scheme) becomes `host/path`.

Normalizing an already normalized URL leaves it unchanged.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from go_makepkg.errors import RepoURLError

WILDCARD_SUFFIX = "/..."

_SSH_SCHEMES = ("ssh", "ssh+git")
_SCP_LIKE = re.compile(r"^(?P<user>[\w.+-]+)@(?P<host>[\w.-]+):(?P<path>[^/].*)$")


@dataclass(frozen=True)
class RepoURL:
    url: str
    wildcard_build: bool = False


def trim_wildcard(repo: str) -> tuple[str, bool]:
    """Strip one trailing `/...` marker; report whether it was present."""
    if repo.endswith(WILDCARD_SUFFIX):
        return repo[: -len(WILDCARD_SUFFIX)], True
    return repo, False


def normalize_repo_url(raw: str) -> RepoURL:
    url, wildcard = trim_wildcard(raw.strip())
    if not url:
        raise RepoURLError("Repository URL is empty.")

    # git@github.com:owner/name.git
    m = _SCP_LIKE.match(url)
    if m:
        url = f"git+ssh://{m['user']}@{m['host']}/{m['path']}"

    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise RepoURLError(f"Invalid repository URL {raw!r}: {e}") from e
    if not parts.scheme or not parts.netloc:
        raise RepoURLError(f"Invalid repository URL {raw!r}: expected scheme://host/path")

    if parts.scheme in _SSH_SCHEMES:
        url = "git+ssh" + url[len(parts.scheme):]

    # ssh://git@github.com:owner/name.git; bracketed IPv6 hosts are left alone
    userinfo, at, host = parts.netloc.rpartition("@")
    hostname, colon, rest = host.partition(":")
    if colon and rest and not rest.isdigit() and not host.startswith("["):
        fixed = f"{userinfo}{at}{hostname}/{rest}"
        url = url.replace(parts.netloc, fixed, 1)

    return RepoURL(url=url, wildcard_build=wildcard)


def package_name_from_url(url: str) -> str:
    """`git://example.com/foo/bar.git` -> `bar`."""
    path = urlsplit(url).path if "://" in url else url
    base = posixpath.basename(path.rstrip("/"))
    name, _ext = posixpath.splitext(base)
    name = name or base
    if not name:
        raise RepoURLError(f"Cannot derive a package name from {url!r}; use -n.")
    return name
