"""CLI entrypoints for docmanifest commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError
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


def _add_path_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the documentation project root (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docmanifest",
        description="Interpret documentation comments and write example manifests.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write examples-manifest.xml and demos-manifest.xml.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_path_argument(generate_parser)
    generate_parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for the manifest files (overrides output_dir in .docmanifest.yml).",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Report problems in documentation comments without writing manifests.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_path_argument(check_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for docmanifest commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    orchestrator = Orchestrator()

    if args.command == "generate":
        try:
            outcome = orchestrator.run_generate(args.path, output_dir=args.output_dir)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        except OSError as exc:
            parser.exit(1, f"docmanifest generate failed: {exc}\nRun with --verbose for more details.\n")
        if not outcome.written:
            print("No examples documented; no manifest written")
        for path in outcome.written:
            print(f"Manifest written to {_relativize(path)}")
        if outcome.issues:
            print(f"{len(outcome.issues)} documentation issue(s) found; run `docmanifest check` for details")
    elif args.command == "check":
        try:
            issues = orchestrator.run_check(args.path)
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")
        for issue in issues:
            print(issue)
        if issues:
            parser.exit(1, f"{len(issues)} documentation issue(s) found\n")
        print("No documentation issues found")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
