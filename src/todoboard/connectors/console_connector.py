# src/todoboard/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

import httpx

from ..cli.commands import ConsoleSession, registry as command_registry, render_tasks
from ..client.http_client import TaskClientNotFound

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(session: ConsoleSession, line: str) -> str | None:
    """
    Run one console line and return the text to show (None for blank input).

    Server/network failures become a one-line message; the session keeps going.
    """
    line = line.strip()
    if not line:
        return None

    if not line.startswith("/"):
        return "Commands start with '/'. Use /help to list them."

    try:
        return command_registry.handle(session, line)
    except TaskClientNotFound as e:
        return f"Not found: {e}"
    except httpx.HTTPError as e:
        logger.warning("Request failed: %s", e)
        return f"Request failed: {e}"
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


def run_console_loop(session: ConsoleSession, read_line: Callable[[str], str] = input) -> None:
    logger.info("Console client started.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    try:
        session.refresh()
        print(render_tasks(session.tasks))
    except httpx.HTTPError as e:
        logger.warning("Initial load failed: %s", e)
        _print_ts(f"Could not load tasks ({e}). Use /refresh once the server is up.")

    while True:
        try:
            user_input = read_line(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        reply = handle_line(session, user_input)
        if reply is not None:
            print(reply)

    logger.info("Console client finished.")
