"""Command-line entrypoint.

Loads the startup configuration and reports the outcome. Configuration
errors are logged as structured events and turned into a non-zero exit
status here, and only here.
"""

from __future__ import annotations

import argparse
import os
import sys
from typing import Optional

import dotenv

from .config import load_config_file
from .errors import AppError, to_error_payload
from .logging import configure_logging, get_logger

DEFAULT_CONFIG_PATH = "config.json"


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wmr-server", description="Load and validate the WMR server configuration."
    )
    parser.add_argument(
        "--config",
        default=os.getenv("WMR_CONFIG", DEFAULT_CONFIG_PATH),
        help="path to the JSON configuration document (env: WMR_CONFIG)",
    )
    parser.add_argument("--log-level", default="INFO")
    parser.add_argument("--log-format", choices=("json", "console"), default="json")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run startup configuration and return the process exit status.

    A ``.env`` file in the working directory is loaded first so that the
    ``WMR_*`` fallbacks can live next to the JSON document.
    """

    argv = argv if argv is not None else sys.argv[1:]
    dotenv.load_dotenv(dotenv.find_dotenv(usecwd=True))
    args = _build_arg_parser().parse_args(argv)
    configure_logging(log_level=args.log_level, json_output=args.log_format == "json")
    logger = get_logger(__name__)

    try:
        config = load_config_file(args.config)
    except AppError as exc:
        logger.error("configuration_failed", **to_error_payload(exc, path_hint=args.config))
        return 1

    logger.info(
        "configuration_loaded",
        port=config.webserver.port,
        debug=config.webserver.debug,
        modules=config.modules,
    )
    return 0


def run() -> None:  # pragma: no cover
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run()
