"""Main CLI entry point for the esvg command-line tool.

Commands:
    format  Re-serialize an SVG file (pretty by default)
    check   Report whether SVG files are well formed
    new     Write an empty document for a paper size
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from esvg import __version__
from esvg.api import parse_file, to_pretty_string, to_string
from esvg.document import Document
from esvg.page import DEFAULT_DPI, PAPER_SIZES, Page
from esvg.shared.config import ConfigError, EsvgConfig
from esvg.shared.errors import EsvgError, PageError, ParseError
from esvg.shared.logging import configure_logging, get_logger
from esvg.shared.result import DiagnosticSeverity

logger = get_logger(__name__, None, "cli")


def load_config(config_path: Optional[Path]) -> EsvgConfig:
    """Load configuration from a JSON file, or defaults when no path is given."""
    if config_path is None:
        return EsvgConfig()
    return EsvgConfig.from_json(config_path.read_text(encoding="utf-8"))


def check_file(path: Path, config: EsvgConfig) -> Dict[str, Any]:
    """Parse one file and describe the outcome."""
    try:
        result = parse_file(path, config)
    except ParseError as e:
        return {
            "file": str(path),
            "valid": False,
            "error": type(e).__name__,
            "message": e.reason,
            "line": e.line,
            "column": e.column,
        }
    except OSError as e:
        return {"file": str(path), "valid": False, "error": "OSError", "message": str(e)}

    return {
        "file": str(path),
        "valid": True,
        "root": result.root.tag,
        "elements": result.element_count,
        "warnings": [
            d.message for d in result.diagnostics
            if d.severity is DiagnosticSeverity.WARNING
        ],
    }


def format_check_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Render check results as JSON or text."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    valid_count = sum(1 for r in results if r["valid"])
    lines = [f"Checked {len(results)} files, {valid_count} valid", "-" * 50]
    for result in results:
        if result["valid"]:
            lines.append(f"OK   {result['file']} ({result['elements']} elements)")
            for warning in result["warnings"]:
                lines.append(f"     warning: {warning}")
        else:
            location = ""
            if "line" in result:
                location = f":{result['line']}:{result['column']}"
            lines.append(
                f"FAIL {result['file']}{location} {result['error']}: {result['message']}"
            )
    return "\n".join(lines)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="esvg",
        description="Parse, check, format and create SVG documents"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only report errors")
    parser.add_argument("--config", "-c", type=Path, help="JSON configuration file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    format_parser = subparsers.add_parser("format", help="Re-serialize an SVG file")
    format_parser.add_argument("path", type=Path, help="SVG file to format")
    format_parser.add_argument(
        "--compact", action="store_true", help="Compact output instead of pretty"
    )
    format_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")

    check_parser = subparsers.add_parser("check", help="Check SVG files are well formed")
    check_parser.add_argument("paths", nargs="+", type=Path, help="SVG files to check")
    check_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    new_parser = subparsers.add_parser("new", help="Create an empty document")
    new_parser.add_argument(
        "--paper", "-p",
        default="A4",
        help=f"Paper preset ({', '.join(PAPER_SIZES)}) or WxH such as 200mmx100mm"
    )
    new_parser.add_argument("--dpi", type=int, default=DEFAULT_DPI, help="Pixels per inch")
    new_parser.add_argument("--margin", type=float, default=0.5, help="Margin in inches")
    new_parser.add_argument("--landscape", action="store_true", help="Rotate to landscape")
    new_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")

    return parser


def _write_output(text: str, output: Optional[Path]) -> None:
    if output is None:
        sys.stdout.write(text)
    else:
        output.write_text(text, encoding="utf-8")
        logger.info("Output written", extra={"path": str(output)})


def cmd_format(args: argparse.Namespace, config: EsvgConfig) -> int:
    """Handle format command."""
    try:
        result = parse_file(args.path, config)
    except (ParseError, OSError) as e:
        print(f"Error: {args.path}: {e}", file=sys.stderr)
        return 1

    if args.compact:
        text = to_string(result.root, config) + "\n"
    else:
        text = to_pretty_string(result.root, config)
    _write_output(text, args.output)
    return 0


def cmd_check(args: argparse.Namespace, config: EsvgConfig) -> int:
    """Handle check command."""
    results = [check_file(path, config) for path in args.paths]
    print(format_check_results(results, args.format))
    return 0 if all(r["valid"] for r in results) else 1


def cmd_new(args: argparse.Namespace, config: EsvgConfig) -> int:
    """Handle new command."""
    try:
        page = Page.build(args.paper, args.dpi, args.margin)
    except (PageError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if args.landscape and page.is_portrait:
        page = page.rotate()

    document = Document(page, config)
    _write_output(document.to_pretty_string(), args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args.config)
    except (ConfigError, OSError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")
    else:
        configure_logging(config.logging_level)

    handlers = {"format": cmd_format, "check": cmd_check, "new": cmd_new}
    try:
        return handlers[args.command](args, config)
    except EsvgError as e:
        logger.error("Command failed", extra={"command": args.command})
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
