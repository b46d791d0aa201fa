# src/todoboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, then either:
- serves the REST API with uvicorn (`todoboard serve`, the default), or
- runs the terminal client against a running server (`todoboard console`).
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ..cli.bootstrap import create_initial_state
from ..cli.commands import ConsoleSession
from ..client.http_client import TaskClient
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..web.app import create_app

logger = logging.getLogger(__name__)


def build_parser(settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="todoboard", description="Personal to-do list service.")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the REST API (default).")
    serve.add_argument("--host", default=settings.host)
    serve.add_argument("--port", type=int, default=settings.port)

    console = sub.add_parser("console", help="Run the terminal client.")
    console.add_argument("--api-url", default=settings.api_url)

    return parser


def serve(settings, *, host: str, port: int) -> None:
    state = create_initial_state(settings=settings)
    app = create_app(state)
    logger.info("Serving %s on http://%s:%s", settings.app_name, host, port)
    # log_config=None keeps uvicorn on the handlers installed by setup_logging.
    uvicorn.run(app, host=host, port=port, log_config=None)


def console(api_url: str) -> None:
    with TaskClient(api_url) as client:
        run_console_loop(ConsoleSession(client=client))


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if args.command == "console":
        console(args.api_url)
        return

    host = getattr(args, "host", settings.host)
    port = getattr(args, "port", settings.port)
    serve(settings, host=host, port=port)
    logger.info("Bye.")


if __name__ == "__main__":
    main()
