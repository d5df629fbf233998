"""CLI entrypoint for tsdecgen."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .diagnostics import Diagnostics
from .generator import Generator
from .logging import configure_logging


def _add_verbose_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsdecgen",
        description="Generate TypeScript declaration files from JSDoc comments.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "-f",
        "--from",
        dest="source",
        required=True,
        help="JavaScript file to read documentation comments from.",
    )
    parser.add_argument(
        "-t",
        "--to",
        dest="target",
        help="Declaration file to write (prints to stdout when omitted).",
    )
    parser.add_argument(
        "-d",
        "--debug",
        type=int,
        choices=[0, 1, 2, 3],
        default=2,
        help="Diagnostics summary level: 0 silent, 1 counts, 2 messages, 3 messages with subjects.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to a .tsdecgen.yml file or the directory holding it (defaults to the current directory).",
    )
    parser.add_argument(
        "--log-file",
        help="Also write a full debug trace to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for tsdecgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        verbose=bool(args.verbose),
        debug_level=args.debug,
        log_file=Path(args.log_file) if args.log_file else None,
    )

    source_path = Path(args.source)
    if not source_path.is_file():
        parser.exit(1, f"Source file {source_path} does not exist.\n")

    config_path = Path(args.config) if args.config else Path.cwd()
    if args.config and not config_path.exists():
        parser.exit(1, f"Config file {config_path} does not exist.\n")
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    diagnostics = Diagnostics()
    generator = Generator(config=config, diagnostics=diagnostics)
    target_path = Path(args.target) if args.target else None
    output = generator.generate_file(source_path, target_path)

    if target_path is not None:
        print(f"File {target_path.name} successfully created.")
    else:
        sys.stdout.write(output)

    diagnostics.conclusion(args.debug)
    if diagnostics.exit_status:
        parser.exit(diagnostics.exit_status)


if __name__ == "__main__":
    main(sys.argv[1:])
