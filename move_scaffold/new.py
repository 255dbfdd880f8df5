"""The ``new`` command: a Move package pre-wired to the Sui framework.

Builds a ``ScaffoldRequest`` from a package name and the active ``Config``
and hands it to the generator.  Errors from the generator propagate
unchanged.
"""

from __future__ import annotations

from pathlib import Path

from move_scaffold.config import Config
from move_scaffold.scaffolder import (
    AddressBinding,
    ScaffoldGenerator,
    ScaffoldRequest,
    TemplateRenderer,
)

MODULE_TEMPLATE = "module.move.j2"


def build_request(
    name: str,
    path: str | Path | None = None,
    config: Config | None = None,
    seed_content: str = "",
) -> ScaffoldRequest:
    """Return the request for a new package called *name*.

    The package gets one dependency (the configured framework) and one
    address named after the lower-cased package, bound to the configured
    placeholder value.
    """
    config = config or Config()
    slug = name.lower()
    return ScaffoldRequest(
        package_name=slug,
        version=config.version,
        dependencies=[config.framework.dependency()],
        addresses=[AddressBinding(name=slug, value=config.address_value)],
        target_path=Path(path) if path is not None else None,
        seed_content=seed_content,
    )


def render_starter_module(name: str, renderer: TemplateRenderer | None = None) -> str:
    """Render an empty ``module <name>::<name>`` as seed content."""
    renderer = renderer or TemplateRenderer()
    slug = name.lower()
    return renderer.render(
        MODULE_TEMPLATE,
        {"module_name": slug, "address_name": slug},
    )


def new_package(
    name: str,
    path: str | Path | None = None,
    config: Config | None = None,
    *,
    with_module: bool = False,
    cwd: str | Path | None = None,
) -> Path:
    """Create a new package and return its root directory.

    Args:
        name: Package name as typed by the user; it is lower-cased.
        path: Explicit destination.  Defaults to ``<cwd>/<name.lower()>``.
        config: Framework and version settings.  Defaults to ``Config()``.
        with_module: Also write ``sources/<name>.move`` with an empty module.
        cwd: Base directory for the default destination.

    Raises:
        ScaffoldError: Propagated from the generator.
    """
    generator = ScaffoldGenerator()
    seed = render_starter_module(name, generator.renderer) if with_module else ""
    request = build_request(name, path, config, seed_content=seed)
    return generator.generate(request, cwd=cwd)
