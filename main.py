# main.py

"""Entry point for the jewelry catalog API (server or operator commands)."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("jewelry_catalog.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="jewelry_catalog",
        description="Jewelry catalog API priced from the live gold price.",
    )
    parser.add_argument(
        "--host",
        default=None,
        help="Interface to bind (default: HOST env or 0.0.0.0).",
    )
    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Port to listen on (default: PORT env or 3000).",
    )
    parser.add_argument(
        "--gold-price",
        action="store_true",
        default=False,
        dest="gold_price",
        help="Print the current gold price and exit.",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Run a connectivity health check on all upstreams.",
    )
    return parser


def main() -> None:
    """Route to the server (default) or a one-shot operator command."""
    log_file = setup_logging(console_level=logging.INFO)
    logger.info("jewelry_catalog starting — log file: %s", log_file)

    args = _build_parser().parse_args()

    if args.gold_price:
        from src.cli.runner import show_gold_price

        sys.exit(show_gold_price())
    elif args.health:
        from src.cli.runner import run_health_check

        sys.exit(asyncio.run(run_health_check()))
    else:
        from src.cli.runner import run_server

        try:
            sys.exit(run_server(args.host, args.port))
        except Exception:
            logger.critical("Fatal error while serving", exc_info=True)
            raise


if __name__ == "__main__":
    main()
