"""move-scaffold scaffolder -- writes fresh Move package skeletons.

This module takes a ``ScaffoldRequest`` and renders a package directory with
a ``Move.toml`` manifest and a ``sources/`` directory.

Quick usage::

    from move_scaffold.scaffolder import (
        AddressBinding, DependencyEntry, ScaffoldGenerator, ScaffoldRequest,
    )

    request = ScaffoldRequest(
        package_name="coin",
        version="0.0.1",
        dependencies=[DependencyEntry(name="Sui", source='{ local = "../sui" }')],
        addresses=[AddressBinding(name="coin", value="0x0")],
    )
    package_root = ScaffoldGenerator().generate(request)
"""

from move_scaffold.scaffolder.generator import (
    AddressBinding,
    AlreadyExistsError,
    DependencyEntry,
    InvalidNameError,
    ScaffoldError,
    ScaffoldGenerator,
    ScaffoldIOError,
    ScaffoldRequest,
)
from move_scaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "AddressBinding",
    "AlreadyExistsError",
    "DependencyEntry",
    "InvalidNameError",
    "ScaffoldError",
    "ScaffoldGenerator",
    "ScaffoldIOError",
    "ScaffoldRequest",
    "TemplateRenderer",
]
