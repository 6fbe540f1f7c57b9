"""CLI entry point for scope metrics."""

import argparse
import json
import logging
import sys
from pathlib import Path

from rich.console import Console

from .analyzer import analyze_files
from .output import display_results

logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Count packages, classes, interfaces, traits, methods and functions in parsed PHP code"
    )
    parser.add_argument(
        "targets",
        nargs="+",
        help="PHP-Parser JSON dump files (php-parse --json-dump --resolve-names)",
        type=Path,
    )
    parser.add_argument(
        "--scopes",
        action="store_true",
        help="Also show the metrics of every namespace and type",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print project metrics as JSON instead of a table",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    return parser.parse_args()


def main() -> None:
    """Run the CLI application."""
    console = Console()
    args = parse_args()

    # Configure logging
    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
        logger.debug("Debug logging enabled")

    # Validate target files
    for target in args.targets:
        if not target.exists():
            console.print(f"[red]Error: File {target} does not exist[/red]")
            sys.exit(1)

        if not target.is_file():
            console.print(f"[red]Error: {target} is not a file[/red]")
            sys.exit(1)

    try:
        metrics = analyze_files(args.targets)

        if args.json:
            console.print_json(json.dumps({str(key): value for key, value in metrics.project_metrics().items()}))
        else:
            display_results(console, metrics, show_scopes=args.scopes)

    except Exception as e:  # noqa: BLE001
        console.print(f"[red]Error analyzing files: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
