"""Main scaffolding orchestrator.

Takes a ``ScaffoldRequest`` and writes a fresh Move package skeleton:

    <target>/
      Move.toml
      sources/
        <package>.move      # only when seed content is supplied

The generator knows nothing about any particular framework.  Dependencies
and address bindings arrive fully formed in the request.
"""

from __future__ import annotations

import contextlib
import re
import shutil
from pathlib import Path

from pydantic import BaseModel, Field

from move_scaffold.utils import errno_name, is_occupied

from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Package layout
# ---------------------------------------------------------------------------

MANIFEST_NAME = "Move.toml"
SOURCES_DIR = "sources"
SOURCE_EXT = ".move"

# Top-level manifest tables; no dependency or address may shadow one.
RESERVED_NAMES: frozenset[str] = frozenset({
    "package",
    "dependencies",
    "addresses",
    "dev-dependencies",
    "dev-addresses",
    "build",
})

_PACKAGE_NAME_RE = re.compile(r"[a-z_][a-z0-9_]*")
_ADDRESS_NAME_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_DEPENDENCY_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ScaffoldError(Exception):
    """Base class for every failure raised while generating a package."""


class InvalidNameError(ScaffoldError):
    """Raised when a package, dependency or address name is unusable."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid name {name!r}: {reason}")


class AlreadyExistsError(ScaffoldError):
    """Raised when the target directory exists and is not empty."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Destination already exists and is not empty: {path}")


class ScaffoldIOError(ScaffoldError):
    """Raised when inspecting or writing the destination fails.

    ``kind`` is the symbolic errno name (``"EACCES"``, ``"ENOSPC"``, ...).
    The originating ``OSError`` is chained as ``__cause__``.
    """

    def __init__(self, kind: str, path: Path, detail: str = "") -> None:
        self.kind = kind
        self.path = path
        message = f"I/O error ({kind}) at {path}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


# ---------------------------------------------------------------------------
# Request model
# ---------------------------------------------------------------------------


class DependencyEntry(BaseModel):
    """A ``[dependencies]`` line; ``source`` is written verbatim."""

    name: str
    source: str


class AddressBinding(BaseModel):
    """An ``[addresses]`` line binding ``name`` to a quoted literal."""

    name: str
    value: str


class ScaffoldRequest(BaseModel):
    """Everything the generator needs to lay down one package."""

    package_name: str = Field(..., description="Package name; lower-cased for the manifest and directory")
    version: str = Field(..., description="Version string written to [package]")
    dependencies: list[DependencyEntry] = Field(default_factory=list)
    addresses: list[AddressBinding] = Field(default_factory=list)
    target_path: Path | None = Field(
        default=None,
        description="Output directory; defaults to <cwd>/<package_slug>",
    )
    seed_content: str = Field(
        default="",
        description="Body of sources/<package_slug>.move; no file when empty",
    )
    manifest_extra: str = Field(
        default="",
        description="Free-form text appended to the end of Move.toml",
    )

    @property
    def package_slug(self) -> str:
        return self.package_name.lower()


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ScaffoldGenerator:
    """Writes a package skeleton described by a ``ScaffoldRequest``.

    Generation is all-or-nothing: if any write fails, whatever this call
    created is removed again before ``ScaffoldIOError`` is raised.  A
    pre-existing empty target directory is left in place.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def generate(self, request: ScaffoldRequest, cwd: str | Path | None = None) -> Path:
        """Generate the package and return its root directory.

        Args:
            request: The package description.
            cwd: Base directory used when ``request.target_path`` is unset.
                Defaults to the process working directory.

        Raises:
            InvalidNameError: A name fails validation.  Nothing is touched.
            AlreadyExistsError: The destination is occupied.  It is left as is.
            ScaffoldIOError: The destination could not be inspected, or a
                write failed.  Partial output is rolled back.
        """
        validate_request(request)

        try:
            root = resolve_target(request, cwd)
            occupied = is_occupied(root)
        except OSError as exc:
            failed = Path(exc.filename) if exc.filename else Path(request.target_path or ".")
            raise ScaffoldIOError(errno_name(exc), failed, exc.strerror or str(exc)) from exc
        if occupied:
            raise AlreadyExistsError(root)

        created: list[Path] = []
        try:
            self._write_package(root, request, created)
        except OSError as exc:
            _rollback(created)
            failed = Path(exc.filename) if exc.filename else root
            raise ScaffoldIOError(errno_name(exc), failed, exc.strerror or str(exc)) from exc

        return root

    def render_manifest(self, request: ScaffoldRequest) -> str:
        """Return the ``Move.toml`` text for *request* without writing it."""
        return self.renderer.render(MANIFEST_NAME + ".j2", _build_context(request))

    # -- Filesystem --------------------------------------------------------

    def _write_package(self, root: Path, request: ScaffoldRequest, created: list[Path]) -> None:
        manifest = self.render_manifest(request)

        if not root.exists():
            # Record the outermost directory that did not exist yet, so a
            # rollback also removes any parents created along the way.
            created.append(_first_missing(root))
            root.mkdir(parents=True)

        sources = root / SOURCES_DIR
        sources.mkdir()
        created.append(sources)

        manifest_path = root / MANIFEST_NAME
        created.append(manifest_path)
        manifest_path.write_text(manifest, encoding="utf-8")

        if request.seed_content:
            source_path = sources / f"{request.package_slug}{SOURCE_EXT}"
            source_path.write_text(request.seed_content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def validate_request(request: ScaffoldRequest) -> None:
    """Raise ``InvalidNameError`` if any name in *request* is unusable."""
    slug = request.package_slug
    if not slug:
        raise InvalidNameError(request.package_name, "package name must not be empty")
    if not _PACKAGE_NAME_RE.fullmatch(slug):
        raise InvalidNameError(
            request.package_name,
            "package name must start with a letter or underscore and contain "
            "only letters, digits and underscores",
        )

    seen: set[str] = set()
    for dep in request.dependencies:
        if not _DEPENDENCY_NAME_RE.fullmatch(dep.name):
            raise InvalidNameError(dep.name, "dependency name must be a bare TOML key")
        _check_unique(dep.name, seen, "dependency")

    seen = set()
    for addr in request.addresses:
        if not _ADDRESS_NAME_RE.fullmatch(addr.name):
            raise InvalidNameError(addr.name, "address name must be an identifier")
        _check_unique(addr.name, seen, "address")


def _check_unique(name: str, seen: set[str], kind: str) -> None:
    key = name.lower()
    if key in RESERVED_NAMES:
        raise InvalidNameError(name, f"{kind} name is reserved")
    if key in seen:
        raise InvalidNameError(name, f"duplicate {kind} name")
    seen.add(key)


def resolve_target(request: ScaffoldRequest, cwd: str | Path | None = None) -> Path:
    """Return the directory the package will be written to."""
    if request.target_path is not None:
        return Path(request.target_path)
    base = Path(cwd) if cwd is not None else Path.cwd()
    return base / request.package_slug


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _build_context(request: ScaffoldRequest) -> dict[str, object]:
    return {
        "package_name": request.package_slug,
        "version": request.version,
        "dependencies": request.dependencies,
        "addresses": request.addresses,
        "manifest_extra": request.manifest_extra.rstrip("\n"),
    }


def _first_missing(path: Path) -> Path:
    """Return the outermost ancestor of *path* (or *path*) that does not exist."""
    missing = path
    for parent in path.parents:
        if parent.exists():
            break
        missing = parent
    return missing


def _rollback(created: list[Path]) -> None:
    """Remove entries recorded during a failed generation, newest first.

    Rollback is best-effort; a failure here must not mask the original error.
    """
    for path in reversed(created):
        with contextlib.suppress(OSError):
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path, ignore_errors=True)
            else:
                path.unlink(missing_ok=True)
