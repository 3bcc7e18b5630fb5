"""
renderer.py

Responsibility: Deterministically render the PKGBUILD and systemd unit.

Rules:
- Templates are loaded once into an immutable `Templates` object and passed
  to the render functions explicitly.
- Rendering uses StrictUndefined; a missing field raises RenderError.
- Rendering only returns text. Nothing is written here, so a failed render
  never leaves a partial file behind.

This module intentionally does NOT know about the filesystem layout or makepkg.
"""

from __future__ import annotations

from dataclasses import dataclass

from jinja2 import Environment, PackageLoader, StrictUndefined, Template, TemplateError

from go_makepkg.errors import RenderError
from go_makepkg.logging import get_logger
from go_makepkg.models import PackageData, ServiceData

logger = get_logger("renderer")

PKGBUILD_TEMPLATE = "PKGBUILD.j2"
SERVICE_TEMPLATE = "service.j2"


def shell_quote(value: object) -> str:
    """Quote a value as a single-quoted shell word."""
    escaped = str(value).replace("'", "'\\''")
    return f"'{escaped}'"


@dataclass(frozen=True)
class Templates:
    pkgbuild: Template
    service: Template


def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("go_makepkg", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["quote"] = shell_quote
    return env


def load_templates() -> Templates:
    env = _environment()
    try:
        return Templates(
            pkgbuild=env.get_template(PKGBUILD_TEMPLATE),
            service=env.get_template(SERVICE_TEMPLATE),
        )
    except TemplateError as e:
        raise RenderError(f"Failed loading templates: {e}") from e


def _render(template: Template, **context: object) -> str:
    try:
        return template.render(**context)
    except Exception as e:  # noqa: BLE001 - surface as RenderError
        raise RenderError(f"Failed rendering template: {template.name}: {e}") from e


def render_pkgbuild(templates: Templates, data: PackageData) -> str:
    logger.info("Creating PKGBUILD...")
    return _render(templates.pkgbuild, data=data)


def render_service(templates: Templates, service: ServiceData) -> str:
    logger.info("Creating service file...")
    return _render(templates.service, service=service)
