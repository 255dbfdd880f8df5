"""move-scaffold command-line interface.

Usage::

    move-scaffold new Coin
    move-scaffold new Coin --path ./packages/coin --with-module
    python -m move_scaffold.cli new Coin --config scaffold.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pydantic import ValidationError

from move_scaffold import __version__
from move_scaffold.config import Config
from move_scaffold.new import new_package
from move_scaffold.scaffolder import ScaffoldError
from move_scaffold.scaffolder.generator import MANIFEST_NAME, SOURCES_DIR
from move_scaffold.utils import (
    display_path,
    print_error,
    print_success,
    print_summary_table,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="move-scaffold",
        description="Create new Move packages wired to the Sui framework",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  move-scaffold new Coin\n"
            "  move-scaffold new Coin -p ./packages/coin --with-module\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new = subparsers.add_parser("new", help="Create a new Move package")
    new.add_argument(
        "name",
        help="Name of the package to create (lower-cased for the directory and address)",
    )
    new.add_argument(
        "--path", "-p",
        default=None,
        help="Directory to create the package in (default: ./<name>)",
    )
    new.add_argument(
        "--with-module",
        action="store_true",
        help="Also write sources/<name>.move containing an empty module",
    )
    new.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (default: MOVE_SCAFFOLD_* environment variables)",
    )
    return parser


def _load_config(path: str | None) -> Config:
    if path is None:
        return Config.from_env()
    return Config.load(Path(path))


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``move-scaffold``."""
    args = build_parser().parse_args(argv)

    try:
        config = _load_config(args.config)
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        print_error(f"Could not load configuration from {args.config}: {exc}")
        sys.exit(1)

    try:
        root = new_package(args.name, args.path, config, with_module=args.with_module)
    except ScaffoldError as exc:
        print_error(str(exc))
        sys.exit(1)

    files = [MANIFEST_NAME]
    files.extend(
        p.relative_to(root).as_posix() for p in sorted((root / SOURCES_DIR).glob("*"))
    )
    print_summary_table(
        {
            "Package": args.name.lower(),
            "Location": display_path(root),
            "Framework": f"{config.framework.name} @ {config.framework.rev}",
            "Files": ", ".join(files),
        },
        title="New Move package",
    )
    print_success(f"Created package {args.name.lower()!r}")


if __name__ == "__main__":
    main()
