"""Shared pytest fixtures for the move-scaffold test suite.

Provides reusable fixtures for:
- An isolated working directory with no MOVE_SCAFFOLD_* overrides
- The default Sui-flavoured scaffold request
- Parsing a generated Move.toml
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import pytest

from move_scaffold.config import Config
from move_scaffold.new import build_request
from move_scaffold.scaffolder import ScaffoldGenerator, ScaffoldRequest

SUI_SOURCE = (
    '{ git = "https://github.com/MystenLabs/sui.git", '
    'subdir = "crates/sui-framework", rev = "main" }'
)


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip MOVE_SCAFFOLD_* variables so the host shell cannot leak in."""
    for key in list(os.environ):
        if key.startswith("MOVE_SCAFFOLD_"):
            monkeypatch.delenv(key)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A fresh, empty current working directory."""
    cwd = tmp_path / "work"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    yield cwd


# ---------------------------------------------------------------------------
# Requests & generator
# ---------------------------------------------------------------------------

@pytest.fixture
def generator() -> ScaffoldGenerator:
    return ScaffoldGenerator()


@pytest.fixture
def coin_request() -> ScaffoldRequest:
    """The request ``move-scaffold new Coin`` builds with default config."""
    return build_request("Coin", config=Config())


# ---------------------------------------------------------------------------
# Manifest helpers
# ---------------------------------------------------------------------------

def read_manifest(package_root: Path) -> dict[str, Any]:
    """Parse ``<package_root>/Move.toml``."""
    with open(package_root / "Move.toml", "rb") as fh:
        return tomllib.load(fh)


def snapshot(path: Path) -> dict[str, bytes | None]:
    """Map every entry under *path* to its bytes (``None`` for directories)."""
    return {
        p.relative_to(path).as_posix(): (None if p.is_dir() else p.read_bytes())
        for p in sorted(path.rglob("*"))
    }
