"""move-scaffold configuration.

Typed configuration for the ``new`` command.  The framework dependency and
the placeholder address written into every fresh package live here rather
than in the generator, which only ever sees what it is handed.  All settings
use Pydantic v2 models so they can be validated at construction time and
serialised to/from JSON or environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from move_scaffold.scaffolder.generator import DependencyEntry
from move_scaffold.scaffolder.templates import toml_string

SUI_GIT_URL = "https://github.com/MystenLabs/sui.git"


class FrameworkConfig(BaseModel):
    """The framework package every new package depends on."""

    name: str = Field(default="Sui", min_length=1, description="Dependency name in Move.toml")
    git: str = Field(default=SUI_GIT_URL, min_length=1)
    subdir: str = Field(default="crates/sui-framework")
    rev: str = Field(default="main", min_length=1)

    def source(self) -> str:
        """Return the inline-table source descriptor for ``[dependencies]``.

        Example::

            { git = "https://github.com/MystenLabs/sui.git", subdir = "crates/sui-framework", rev = "main" }
        """
        parts = [f"git = {toml_string(self.git)}"]
        if self.subdir:
            parts.append(f"subdir = {toml_string(self.subdir)}")
        parts.append(f"rev = {toml_string(self.rev)}")
        return "{ " + ", ".join(parts) + " }"

    def dependency(self) -> DependencyEntry:
        return DependencyEntry(name=self.name, source=self.source())


class Config(BaseModel):
    """Global move-scaffold configuration.

    Instances are typically created once by the CLI entry point, either from
    the environment or from a JSON file, and passed to ``new_package``.
    """

    version: str = Field(default="0.0.1", min_length=1)
    address_value: str = Field(default="0x0", min_length=1)
    framework: FrameworkConfig = Field(default_factory=FrameworkConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON.

        Missing keys fall back to their defaults.
        """
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            MOVE_SCAFFOLD_VERSION, MOVE_SCAFFOLD_ADDRESS,
            MOVE_SCAFFOLD_FRAMEWORK_GIT, MOVE_SCAFFOLD_FRAMEWORK_SUBDIR,
            MOVE_SCAFFOLD_FRAMEWORK_REV.
        """
        framework_kwargs: dict[str, Any] = {}
        if os.environ.get("MOVE_SCAFFOLD_FRAMEWORK_GIT"):
            framework_kwargs["git"] = os.environ["MOVE_SCAFFOLD_FRAMEWORK_GIT"]
        # An empty subdir is meaningful (framework at the repo root).
        if "MOVE_SCAFFOLD_FRAMEWORK_SUBDIR" in os.environ:
            framework_kwargs["subdir"] = os.environ["MOVE_SCAFFOLD_FRAMEWORK_SUBDIR"]
        if os.environ.get("MOVE_SCAFFOLD_FRAMEWORK_REV"):
            framework_kwargs["rev"] = os.environ["MOVE_SCAFFOLD_FRAMEWORK_REV"]

        kwargs: dict[str, Any] = {}
        if os.environ.get("MOVE_SCAFFOLD_VERSION"):
            kwargs["version"] = os.environ["MOVE_SCAFFOLD_VERSION"]
        if os.environ.get("MOVE_SCAFFOLD_ADDRESS"):
            kwargs["address_value"] = os.environ["MOVE_SCAFFOLD_ADDRESS"]

        return cls(framework=FrameworkConfig(**framework_kwargs), **kwargs)
