"""Command line interface for climaker."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Mapping, Sequence

from rich.console import Console
from rich.markup import escape

from . import __version__
from .config import ScaffoldSettings
from .errors import ScaffoldError
from .prompts import resolve_metadata
from .scaffold import ProjectScaffolder

LOG_FORMAT = "%(levelname)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="climaker",
        description="Create a new CLI application",
    )
    parser.add_argument("name", nargs="?", help="Project name")
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Skip all prompts and use defaults",
    )
    parser.add_argument(
        "--no-git",
        dest="git",
        action="store_false",
        help="Skip git initialization",
    )
    parser.add_argument(
        "--no-install",
        dest="install",
        action="store_false",
        help="Skip dependency installation",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Show progress messages (repeat for debug output)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse ``argv``, rejecting unknown options and extra commands."""

    parser = build_parser()
    args, extras = parser.parse_known_args(argv)
    for extra in extras:
        if extra.startswith("-"):
            parser.error(f"unknown option '{extra}'")
        parser.error(f"unknown command '{extra}'")
    return args


def configure_logging(verbosity: int, env: Mapping[str, str] | None = None) -> None:
    environment: Mapping[str, str] = env if env is not None else os.environ
    level_name = environment.get("CLIMAKER_LOG_LEVEL", "").strip().upper()
    if level_name and isinstance(logging.getLevelName(level_name), int):
        level = logging.getLevelName(level_name)
    elif verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
    logging.getLogger("climaker").setLevel(level)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    out = Console(soft_wrap=True)
    err = Console(stderr=True, soft_wrap=True)

    try:
        settings = ScaffoldSettings.from_env()
        metadata = resolve_metadata(
            args.name,
            skip_prompts=args.yes,
            fallback_name=settings.fallback_name,
        )
        scaffolder = ProjectScaffolder(settings)
        report = scaffolder.create(metadata, Path.cwd(), git=args.git, install=args.install)
    except KeyboardInterrupt:
        err.print("[red]error[/red]: cancelled")
        return 130
    except (ScaffoldError, ValueError) as exc:
        err.print(f"[red]error[/red]: Failed to create project: {escape(str(exc))}")
        return 1

    for warning in report.warnings:
        err.print(f"[yellow]warning[/yellow]: {escape(str(warning))}")
    out.print(f"[green]success[/green]: {escape(report.next_steps())}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
