"""CLI entrypoints for repotree commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .github import parse_repo_reference
from .logging import configure_logging
from .orchestrator import AnalysisError, Orchestrator
from .render import ExportFormat
from .session import FilterMode


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repotree",
        description="Fetch a GitHub repository tree and render its structure.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .repotree.yml file or the directory holding it.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a repository and print one of its views.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "repository",
        help="Repository as owner/name or a github.com URL.",
    )
    analyze_parser.add_argument(
        "-f",
        "--format",
        choices=[fmt.value for fmt in ExportFormat],
        default=ExportFormat.SUMMARY.value,
        help="View to print (defaults to summary).",
    )
    analyze_parser.add_argument(
        "--search",
        default="",
        help="Case-insensitive substring filter for the list view.",
    )
    analyze_parser.add_argument(
        "--filter",
        dest="filter_mode",
        choices=[mode.value for mode in FilterMode],
        default=FilterMode.ALL.value,
        help="Restrict the list view to files, folders or important files.",
    )
    analyze_parser.add_argument(
        "--detailed",
        action="store_true",
        help="Show icons and file sizes in the list view.",
    )
    analyze_parser.add_argument(
        "--expand",
        action="append",
        default=None,
        metavar="FOLDER",
        help="Show only these folders opened in the tree view (repeatable).",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the view to this file instead of stdout.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


async def _run_analyze(orchestrator: Orchestrator, owner: str, name: str, args: argparse.Namespace) -> str:
    await orchestrator.analyze(owner, name)
    orchestrator.set_search(args.search)
    orchestrator.set_filter(args.filter_mode)
    for folder in args.expand or []:
        orchestrator.toggle_folder(folder)
    return orchestrator.render(args.format, detailed=args.detailed)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repotree commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "analyze":
        try:
            owner, name = parse_repo_reference(args.repository)
        except ValueError as exc:
            parser.exit(2, f"{exc}\n")
        try:
            config = load_config(args.config)
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        orchestrator = Orchestrator(config=config)
        try:
            output = asyncio.run(_run_analyze(orchestrator, owner, name, args))
        except AnalysisError as exc:
            parser.exit(1, f"repotree analyze failed: {exc}\nRun with --verbose for more details.\n")
        except ValueError as exc:
            parser.exit(2, f"{exc}\n")
        if args.output is not None:
            args.output.write_text(output if output.endswith("\n") else output + "\n", encoding="utf-8")
            print(f"Wrote {args.format} view to {args.output}")
        else:
            print(output.rstrip("\n"))
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
