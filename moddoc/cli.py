"""CLI entrypoint for moddoc."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .errors import ModDocError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator
from .service import run_service


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="moddoc",
        description="Generate browsable HTML documentation for a Go module.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-o",
        "--out",
        default=None,
        help="Where to put the generated pages (defaults to ./dist).",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Run a server once docs are built, regenerating them on every request.",
    )
    parser.add_argument("--host", default=None, help="Interface to listen on in server mode.")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on in server mode.")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file.")
    parser.add_argument(
        "module",
        nargs="?",
        default=".",
        help="Path to the module (or a file inside it) to document.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for moddoc."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    logger = get_logger("cli")

    try:
        config = load_config(
            args.module,
            output=args.out,
            serve=bool(args.serve),
            host=args.host,
            port=args.port,
        )
        logger.info('Using "%s" as an output directory...', config.output_dir)
        orchestrator = Orchestrator(config)
        result = orchestrator.run_build()
    except ModDocError as exc:
        parser.exit(1, f"moddoc: {exc}\n")

    logger.info(
        "Documented %d packages of %s",
        len(result.model.packages),
        result.model.import_path,
    )

    if config.serve:
        try:
            run_service(orchestrator, host=config.server.host, port=config.server.port)
        except ModDocError as exc:
            parser.exit(1, f"moddoc: {exc}\n")


if __name__ == "__main__":
    main(sys.argv[1:])
