"""
cli.py

Responsibility: CLI entrypoint for go-makepkg.

High-level flow:
1) Resolve defaults (YAML config, git identity) -> build the parser
2) Normalize the repository URL -> package name
3) Collect and stage local files into the build directory
4) Render service file (optional) and PKGBUILD, write .gitignore (optional)
5) (Optional) run makepkg, clean up

This module should orchestrate behavior but keep concerns isolated:
- URL handling: `repo_url.py`
- File selection and hashing: `collector.py`
- Rendering: `renderer.py`
- Filesystem writes: `writer.py`
- makepkg: `makepkg.py`
"""

from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path

from go_makepkg import __version__
from go_makepkg.collector import backup_list, collect_files, file_hash
from go_makepkg.config import Defaults, git_maintainer, parse_comma_list, resolve_defaults
from go_makepkg.errors import GoMakepkgError
from go_makepkg.logging import configure_logging, get_logger
from go_makepkg.makepkg import clean_up, run_makepkg
from go_makepkg.models import SYSTEMD_UNIT_DIR, PackageData, PackageFile, ServiceData
from go_makepkg.renderer import Templates, load_templates, render_pkgbuild, render_service
from go_makepkg.repo_url import normalize_repo_url, package_name_from_url
from go_makepkg.writer import create_output_dir, stage_files, write_gitignore, write_text

logger = get_logger("cli")

_HELP_FLAGS = frozenset({"-h", "--help", "-v", "--version"})

_GO_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_EPILOG = """\
Will create PKGBUILD which can be used for building a package from the
specified repo, including optional additional files in the package.

Also capable of creating a simple systemd .service file for starting/stopping
the daemon, and a .gitignore file in the build directory.

Additional files must be stored by the path they will be placed at in the
system after package installation. E.g., to include a config, place it at
'etc/somename/config.conf'. Files without a directory are installed to
/usr/bin.

Trivial run (all files in the directory except generated ones are included):
  go-makepkg "my cool package" git://my-repo-url **/* -B

For projects that keep binaries in sub-directories and are go-gettable with
the '...' suffix, add that suffix to the repo URL as well:
  go-makepkg "gb tool" git://github.com/constabulary/gb/... -B
"""


def _version_var(value: str) -> str:
    if not _GO_IDENTIFIER.match(value):
        raise argparse.ArgumentTypeError(f"not a Go identifier: {value!r}")
    return value


def _build_parser(defaults: Defaults | None = None) -> argparse.ArgumentParser:
    d = defaults or Defaults()
    p = argparse.ArgumentParser(
        prog="go-makepkg",
        description="PKGBUILD generator for Golang programs.",
        epilog=_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--version", action="version", version=f"go-makepkg {__version__}")

    p.add_argument("desc", help="Package description")
    p.add_argument("repo", help="Repository URL, optionally ending with '/...'")
    p.add_argument("files", nargs="*", metavar="file", help="Additional files to include in the package")

    p.add_argument("-s", dest="service", action="store_true", help="Create service file and include it to the package")
    p.add_argument("-g", dest="gitignore", action="store_true", help="Create .gitignore file")
    p.add_argument("-B", dest="build", action="store_true", help="Run 'makepkg' after creating PKGBUILD")
    p.add_argument("-c", dest="clean", action="store_true", help="Clean up leftover files and folders")

    p.add_argument("-n", dest="pkgname", metavar="PKGNAME", default=None, help="Use specified package name instead of the one generated from <repo>")
    p.add_argument("-l", dest="license", metavar="LICENSE", default=d.license, help="License to use (default: %(default)s)")
    p.add_argument("-r", dest="pkgrel", metavar="PKGREL", default=d.release, help="Package release number (default: %(default)s)")
    p.add_argument("-d", dest="directory", metavar="DIR", default=d.directory, help="Directory to place PKGBUILD (default: %(default)s)")
    p.add_argument("-o", dest="output", metavar="NAME", default=d.output, help="File to write PKGBUILD (default: %(default)s)")
    maintainer_help = "Specify maintainer"
    if d.maintainer:
        maintainer_help += " (default: %(default)s)"
    p.add_argument("-m", dest="maintainer", metavar="NAME", default=d.maintainer, help=maintainer_help)
    p.add_argument("-p", dest="version_var", metavar="VAR", type=_version_var, default=None, help="Pass pkgver to specified global variable using ldflags")
    p.add_argument("-D", dest="depends", metavar="LIST", type=parse_comma_list, default=d.depends, help="Comma-separated list of runtime package dependencies (depends)")
    p.add_argument("-M", dest="makedepends", metavar="LIST", type=parse_comma_list, default=d.makedepends, help="Comma-separated list of make package dependencies (makedepends)")

    p.add_argument("--overwrite", action="store_true", help="Allow writing into an existing build directory")
    p.add_argument("--config", default=None, help="YAML file with default option values")
    p.add_argument("--verbose", action="store_true", help="Increase log verbosity for troubleshooting")
    return p


def _preparse(argv: list[str]) -> argparse.Namespace:
    """Read the options needed before the real parser can be built."""
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", default=None)
    pre.add_argument("--verbose", action="store_true")
    known, _rest = pre.parse_known_args(argv)
    return known


def _create_service(
    templates: Templates, *, out_dir: Path, pkgname: str, description: str
) -> PackageFile:
    service_name = f"{pkgname}.service"
    content = render_service(templates, ServiceData(description=description, exec_name=pkgname))
    service_path = write_text(out_dir / service_name, content)
    return PackageFile(
        path=f"{SYSTEMD_UNIT_DIR}/{service_name}",
        name=service_name,
        hash=file_hash(service_path),
    )


def run(args: argparse.Namespace) -> int:
    templates = load_templates()

    repo = normalize_repo_url(args.repo)
    pkgname = args.pkgname or package_name_from_url(repo.url)
    logger.debug("Repository %s -> %s (package %s, wildcard=%s)", args.repo, repo.url, pkgname, repo.wildcard_build)

    out_dir = create_output_dir(args.directory, overwrite=bool(args.overwrite))

    files = collect_files(args.files, out_dir, script_name=args.output)
    stage_files(files, out_dir)
    backup = backup_list(files)

    if args.service:
        files.append(_create_service(templates, out_dir=out_dir, pkgname=pkgname, description=args.desc))

    pkgbuild = render_pkgbuild(
        templates,
        PackageData(
            maintainer=args.maintainer,
            pkgname=pkgname,
            pkgrel=args.pkgrel,
            pkgdesc=args.desc,
            repo_url=repo.url,
            license=args.license,
            files=tuple(files),
            backup=tuple(backup),
            depends=tuple(args.depends),
            makedepends=tuple(args.makedepends),
            wildcard_build=repo.wildcard_build,
            version_var=args.version_var,
        ),
    )
    write_text(out_dir / args.output, pkgbuild)

    if args.gitignore:
        write_gitignore(out_dir, pkgname)

    if args.build:
        run_makepkg(out_dir, clean=bool(args.clean))

    if args.clean:
        clean_up(out_dir, pkgname)

    return 0


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    known = _preparse(argv)
    configure_logging(verbose=known.verbose)

    try:
        defaults = resolve_defaults(known.config)
    except GoMakepkgError as e:
        if not _HELP_FLAGS.intersection(argv):
            logger.error("%s", e)
            return 1
        logger.warning("%s", e)
        defaults = Defaults(maintainer=git_maintainer())

    parser = _build_parser(defaults)
    args = parser.parse_intermixed_args(argv)
    try:
        return run(args)
    except GoMakepkgError as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
