"""Command-line interface for launcher."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import yaml
from prompt_toolkit.input import create_input
from prompt_toolkit.output import create_output
from pydantic import ValidationError

from launcher import __version__
from launcher.api import Launcher
from launcher.config.loader import ItemsFileError, load_config, load_items_file
from launcher.config.schema import Theme
from launcher.core.color import parse_color
from launcher.core.items import Item, LauncherResult
from launcher.core.matcher import filter_and_rank, score_item

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="launcher",
        description="Popup search launcher with fuzzy-filtered results",
        epilog="Example: launcher --items servers.json 'Switch server...'",
    )

    parser.add_argument(
        "placeholder",
        nargs="?",
        help="Placeholder text shown in the empty search box",
    )

    parser.add_argument(
        "--items",
        "-i",
        metavar="FILE",
        help="JSON or YAML file with items to offer ('-' reads stdin)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="Configuration file path (default: ~/.config/launcher/config.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Drop-in configuration directory (default: ~/.config/launcher/conf.d/)",
    )

    parser.add_argument(
        "--theme",
        "-t",
        metavar="NAME",
        help="Theme to use",
    )

    parser.add_argument(
        "--max-items",
        "-n",
        type=int,
        metavar="N",
        help="Number of result rows shown before scrolling",
    )

    parser.add_argument(
        "--filter",
        "-f",
        metavar="QUERY",
        help="Print the items ranked for QUERY instead of showing the launcher",
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colors",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debug messages to stderr",
    )

    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def format_ranked(
    items: Sequence[Item], query: str, theme: Theme, color: bool = True
) -> list[str]:
    """Format items ranked for a query, one line per item.

    Args:
        items: Candidate items
        query: Query to rank by
        theme: Theme providing ui:score/ui:title/ui:subtitle colors
        color: Whether to emit ANSI colors

    Returns:
        Lines of "score  title  subtitle"
    """

    def paint(element: str, text: str) -> str:
        if not color or element not in theme.styles:
            return text
        return parse_color(theme.styles[element]).wrap(text)

    lines: list[str] = []
    for item in filter_and_rank(items, query):
        line = f"{paint('ui:score', f'{score_item(query, item).score:>5}')}  {paint('ui:title', item.title)}"
        if item.subtitle:
            line += f"  {paint('ui:subtitle', item.subtitle)}"
        lines.append(line)
    return lines


def format_result(result: LauncherResult, as_json: bool = False) -> str:
    """Format a launcher outcome for stdout."""
    if as_json:
        return json.dumps(result.to_dict(), ensure_ascii=False)
    return "\n".join(result.to_lines())


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose)

    # Load configuration
    try:
        config = load_config(
            config_path=parsed.config,
            dropin_dir=parsed.config_dir,
        )
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    # Override config options
    if parsed.no_color:
        config.launcher.color = False
    if parsed.max_items is not None:
        if parsed.max_items < 1:
            print("Error: --max-items must be at least 1", file=sys.stderr)
            return 1
        config.launcher.max_visible_items = parsed.max_items

    items = config.get_items()
    if parsed.items:
        try:
            items.extend(load_items_file(parsed.items))
        except (OSError, ItemsFileError) as e:
            print(f"Error loading items: {e}", file=sys.stderr)
            return 1

    if parsed.filter is not None:
        color = config.launcher.color and sys.stdout.isatty()
        for line in format_ranked(items, parsed.filter, config.get_theme(parsed.theme), color):
            print(line)
        return 0

    # Keep drawing on the terminal when stdin carries items or stdout is captured
    tty = None
    if not sys.stdin.isatty():
        try:
            tty = open("/dev/tty")
        except OSError:
            print("Error: no terminal available for the launcher", file=sys.stderr)
            return 1

    try:
        result = Launcher(config, theme=parsed.theme).show(
            placeholder=parsed.placeholder,
            items=items,
            input=create_input(tty, always_prefer_tty=True),
            output=create_output(always_prefer_tty=True),
        )
    except KeyboardInterrupt:
        return 130
    finally:
        if tty is not None:
            tty.close()

    print(format_result(result, as_json=parsed.json))
    return 1 if result.is_dismissed else 0


if __name__ == "__main__":
    sys.exit(main())
