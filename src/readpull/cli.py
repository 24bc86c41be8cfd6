"""Command-line interface for readpull."""

import argparse
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from . import __version__
from .conversion import HtmlToMarkdown, MarkdownConverter
from .engine import PresetEngine
from .logging_config import setup_logging
from .models.config import ReadpullConfig
from .models.preset import PresetLoadError, load_fixture, load_preset
from .presets.feedback import render_feedback

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="readpull",
        description="Extract the readable main content of a page with a site preset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Show the normalized markup presets are written against
  readpull normalize page.html --url https://example.com/post/1 --pretty

  # Check a preset without extracting
  readpull validate page.html --preset preset.json

  # Extract and preview as markdown
  readpull apply page.html --preset preset.json --markdown

  # Use a {"url": ..., "html": ...} fixture as input
  readpull apply fixture.json --fixture --preset preset.yaml
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    # Shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "input",
        help="HTML file to read ('-' for stdin)",
    )
    common.add_argument(
        "--url",
        type=str,
        default=None,
        help="Page URL; same-host absolute links become host-relative",
    )
    common.add_argument(
        "--fixture",
        action="store_true",
        help='Treat input as a {"url": ..., "html": ...} JSON fixture',
    )
    common.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    common.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    # Shared by commands that take a preset
    with_preset = argparse.ArgumentParser(add_help=False)
    with_preset.add_argument(
        "--preset",
        "-p",
        type=Path,
        required=True,
        help="Preset file (.json, or .yaml/.yml with the yaml extra)",
    )
    with_preset.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print machine-readable JSON",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize = subparsers.add_parser("normalize", parents=[common], help="Print normalized markup")
    normalize.add_argument(
        "--pretty",
        action="store_true",
        help="Indent the markup",
    )

    subparsers.add_parser(
        "validate",
        parents=[common, with_preset],
        help="Report problems of a preset against a page",
    )

    apply = subparsers.add_parser(
        "apply",
        parents=[common, with_preset],
        help="Extract main content with a preset",
    )
    apply.add_argument(
        "--markdown",
        "-m",
        action="store_true",
        help="Convert extracted markup to Markdown",
    )

    return parser


def _read_input(args: argparse.Namespace) -> tuple[str, Optional[str]]:
    """Return (markup, url) for the command input."""
    if args.fixture:
        fixture = load_fixture(Path(args.input))
        return fixture.html, args.url or fixture.url

    if args.input == "-":
        return sys.stdin.read(), args.url

    try:
        return Path(args.input).read_text(encoding="utf-8", errors="replace"), args.url
    except OSError as e:
        raise PresetLoadError(f"Cannot read {args.input}: {e}") from e


def run_command(
    args: argparse.Namespace,
    config: ReadpullConfig,
    console: Console,
    err_console: Console,
) -> int:
    """Run a parsed command; extracted content goes to ``console``, feedback to ``err_console``."""
    markup, url = _read_input(args)
    engine = PresetEngine(config)
    document = engine.normalize(markup, url)

    if args.command == "normalize":
        console.print(engine.serialize(document, pretty=args.pretty), markup=False, highlight=False)
        return EXIT_OK

    preset = load_preset(args.preset)
    report = engine.validate(document, preset)
    result = engine.apply(document, preset)

    if args.command == "validate":
        if args.as_json:
            console.print_json(json.dumps(report.to_dict()))
        else:
            feedback = render_feedback(report, result)
            if feedback:
                console.print(feedback, markup=False, highlight=False)
            else:
                console.print("[green]No problems found[/green]")
        return EXIT_REJECTED if report.is_blocking else EXIT_OK

    if args.as_json:
        console.print_json(json.dumps({"result": result.to_dict(), "problems": report.to_dict()}))
        return EXIT_OK if result.ok else EXIT_REJECTED

    if not result.ok:
        err_console.print(f"[red]Rejected:[/red] {result.type.value}")
        err_console.print(render_feedback(report, result), markup=False, highlight=False)
        return EXIT_REJECTED

    converter: MarkdownConverter = HtmlToMarkdown()
    output = converter.convert(result.markup, url) if args.markdown else result.markup
    console.print(output, markup=False, highlight=False)
    if report.non_critical and not args.quiet:
        err_console.print(render_feedback(report, result), markup=False, highlight=False, style="yellow")
    return EXIT_OK


def _log_level(args: argparse.Namespace) -> str:
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return "WARNING"


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    console = Console(soft_wrap=True, emoji=False)
    err_console = Console(stderr=True, soft_wrap=True, emoji=False)

    config = ReadpullConfig(log_level=_log_level(args))
    setup_logging(config.log_level, force=True)

    try:
        return run_command(args, config, console, err_console)
    except PresetLoadError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return EXIT_USAGE
    except ValidationError as e:
        err_console.print(f"[red]Invalid preset:[/red] {escape(str(e))}", highlight=False)
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
