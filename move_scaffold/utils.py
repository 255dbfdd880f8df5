"""Shared utility functions for move-scaffold.

Provides the Rich consoles used for all user-visible output, a few
formatting helpers, and small file-system predicates used by the
scaffolder.
"""

from __future__ import annotations

import errno
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def is_occupied(path: str | Path) -> bool:
    """Return ``True`` if *path* holds something a scaffold must not overwrite.

    A missing path and an empty directory are both free.  A non-empty
    directory, a regular file, or any other entry counts as occupied.
    """
    p = Path(path)
    if not p.exists() and not p.is_symlink():
        return False
    if p.is_dir() and not p.is_symlink():
        return any(p.iterdir())
    return True


def errno_name(exc: OSError) -> str:
    """Return the symbolic errno name for *exc* (``"EACCES"``, ``"ENOSPC"``...).

    Falls back to the exception class name when no errno is attached.
    """
    if exc.errno is not None:
        return errno.errorcode.get(exc.errno, str(exc.errno))
    return type(exc).__name__


def display_path(path: str | Path, base: str | Path | None = None) -> str:
    """Render *path* relative to *base* (default: cwd) when it lies inside it."""
    p = Path(path)
    root = Path(base) if base is not None else Path.cwd()
    try:
        return str(p.resolve().relative_to(root.resolve()))
    except ValueError:
        return str(p)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message to stderr."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
