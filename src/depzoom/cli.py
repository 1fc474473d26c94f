"""Command-line interface for depzoom."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from depzoom.discover import parse_ignore
from depzoom.errors import DiscoveryError
from depzoom.pipeline import run

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="depzoom",
        description="Generates a dependency graph visualization for a Go project.",
    )
    parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path("."),
        help="The root directory of the Go project (default: current directory)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Output file; a .json suffix writes the raw graph bundle "
        "(default: dependency_graph.html in the project directory)",
    )
    parser.add_argument(
        "--ignore",
        default="",
        help="Comma-separated list of paths to ignore (relative to the project directory)",
    )
    parser.add_argument(
        "--name",
        default=None,
        help="Page title (default: derived from the directory name)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for `go list` in each module (default: no limit)",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        dest="open_browser",
        help="Open the generated HTML in a browser",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if args.verbose:
        logging.getLogger("depzoom").setLevel(logging.DEBUG)

    try:
        run(
            args.project_dir,
            output=args.output,
            ignore=parse_ignore(args.ignore),
            name=args.name,
            timeout=args.timeout,
            open_browser=args.open_browser,
        )
    except DiscoveryError as e:
        logger.error("%s", e)
        sys.exit(1)
