#!/usr/bin/env python3
"""
mdmapper CLI: plan markdown document paths and anchors for a reflection tree.

Commands:
  plan:         Map an analyzer project file to documents and anchors
  check-outdir: Test whether a directory looks like a previous output directory
  serve:        Start the HTTP API
"""

import argparse
import logging
import sys
from pathlib import Path

from config import config
from exceptions import MdMapperError
from models import PlanResult, load_project
from planner import PlanOptions
from theme import MarkdownTheme


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def cmd_plan(args: argparse.Namespace) -> int:
    """Plan command: load project → plan → print or write the result.

    Args:
        args: Parsed arguments with input, flavor, no_readme, format, output

    Returns:
        Exit code (0 on success, non-zero on failure)
    """
    try:
        project_node = load_project(args.input)
        options = PlanOptions.from_config(
            config,
            flavor=args.flavor,
            display_readme=False if args.no_readme else None,
        )
        project = project_node.to_project()
        urls = MarkdownTheme(options).get_urls(project)
    except MdMapperError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    result = PlanResult.from_plan(project, urls)
    text = result.to_yaml() if args.format == "yaml" else result.model_dump_json(indent=2) + "\n"

    if args.output:
        out_path: Path = args.output
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        print(f"Wrote {len(result.documents)} documents, {len(result.reflections)} reflections to {out_path}")
    else:
        sys.stdout.write(text)
    return 0


def cmd_check_outdir(args: argparse.Namespace) -> int:
    """Check-outdir command: exit 0 if the directory holds previous output, 3 if not.

    Falls back to OUTPUT_DIR from config when no directory is given.
    """
    out_dir: Path = args.out_dir or config.output_path
    if not out_dir.is_dir():
        print(f"Error: Not a directory: {out_dir}", file=sys.stderr)
        return 1

    if MarkdownTheme().is_output_directory(out_dir):
        print(f"{out_dir}: previous output directory")
        return 0
    print(f"{out_dir}: not an output directory")
    return 3


def cmd_serve(args: argparse.Namespace) -> int:
    """Serve command: run the HTTP API with uvicorn."""
    import uvicorn

    print(f"Serving mdmapper API at http://{args.host}:{args.port} (Ctrl+C to stop)")
    try:
        uvicorn.run("api.app:app", host=args.host, port=args.port, log_level=config.LOG_LEVEL.lower())
    except OSError as e:
        print(f"Failed to start server: {e}", file=sys.stderr)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser with subcommands.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="mdmapper",
        description="mdmapper CLI: plan, check-outdir, serve",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # plan subcommand
    plan_parser = subparsers.add_parser("plan", help="Map a project to markdown documents and anchors")
    plan_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Project file from the analyzer (.json, .yml or .yaml)",
    )
    plan_parser.add_argument(
        "--flavor",
        type=str,
        default=None,
        help="Anchor flavor: generic or strict-header-slug (overrides MD_FLAVOUR)",
    )
    plan_parser.add_argument(
        "--no-readme",
        action="store_true",
        help="Do not display the readme on the index document",
    )
    plan_parser.add_argument("--format", choices=["json", "yaml"], default="json", help="Output format")
    plan_parser.add_argument("--output", type=Path, default=None, help="Write the result here instead of stdout")
    plan_parser.epilog = (
        "Examples:\n"
        "  mdmapper plan --input project.json\n"
        "  mdmapper plan --input project.yaml --flavor strict-header-slug --format yaml\n"
    )

    # check-outdir subcommand
    check_parser = subparsers.add_parser("check-outdir", help="Test for a previous output directory")
    check_parser.add_argument(
        "out_dir",
        type=Path,
        nargs="?",
        default=None,
        help="Directory to inspect (defaults to OUTPUT_DIR)",
    )

    # serve subcommand
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", type=str, default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on (default: 8000)")

    return parser


def main() -> None:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args()
    configure_logging(config.LOG_LEVEL)

    if args.command == "plan":
        rc = cmd_plan(args)
    elif args.command == "check-outdir":
        rc = cmd_check_outdir(args)
    elif args.command == "serve":
        rc = cmd_serve(args)
    else:
        parser.print_help()
        rc = 2

    sys.exit(rc)


if __name__ == "__main__":
    main()
