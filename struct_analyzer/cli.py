"""CLI entrypoints for struct-analyzer commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .analyzers.declarations import extract_field_documentation
from .analyzers.tree_sitter import GoSourceParser
from .config import ConfigError, load_config
from .errors import StructAnalyzerError
from .logging import configure_logging
from .orchestrator import Orchestrator


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="struct-analyzer",
        description="Extract struct, field and tag metadata from Go repositories.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyse one or more repositories and write a JSON report.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_log_file_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "locators",
        nargs="+",
        help="Local repository paths or remote git URLs.",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Destination JSON file (defaults to the configured output, analysis.json).",
    )
    analyze_parser.add_argument(
        "--config",
        default=".",
        help="Path to .struct-analyzer.yml or its directory (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--max-workers",
        type=_positive_int,
        default=None,
        help="Limit the number of repositories analysed concurrently.",
    )

    docs_parser = subparsers.add_parser(
        "field-docs",
        help="Print the documentation of every struct field in a Go file.",
    )
    _add_verbose_option(docs_parser, suppress_default=True)
    _add_log_file_option(docs_parser, suppress_default=True)
    docs_parser.add_argument("path", help="Path to a Go source file.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for struct-analyzer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    configure_logging(verbose=bool(args.verbose), log_file=log_file)

    if args.command == "analyze":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        if args.max_workers is not None:
            config = replace(config, max_workers=args.max_workers)
        orchestrator = Orchestrator(config)
        destination = Path(args.output) if args.output else None
        try:
            output = orchestrator.run(args.locators, destination)
        except (StructAnalyzerError, OSError) as exc:
            parser.exit(1, f"struct-analyzer analyze failed: {exc}\nRun with --verbose for more details.\n")
        print(f"Analysis written to {_relativize(output)}")
    elif args.command == "field-docs":
        try:
            parsed = GoSourceParser().parse_file(Path(args.path))
        except OSError as exc:
            parser.exit(1, f"{exc}\n")
        except StructAnalyzerError as exc:
            parser.exit(1, f"struct-analyzer field-docs failed: {exc}\n")
        print(json.dumps(extract_field_documentation(parsed), indent=2, ensure_ascii=False))
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
