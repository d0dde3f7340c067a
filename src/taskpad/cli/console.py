# src/taskpad/cli/console.py

from __future__ import annotations

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..client.controller import TaskController
from ..client.render import render_board
from .commands import CommandRegistry
from .commands import registry as command_registry

logger = logging.getLogger(__name__)

InputReader = Callable[[str], Awaitable[str]]

PROMPT = ">>> "

# Commands that do not change the board; no redraw after them.
_NO_REDRAW = {"/help", "/h", "/?", "/state", "/list", "/ls"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def _read_stdin(prompt: str) -> str:
    # input() blocks; keep the event loop free while the user types.
    return await asyncio.to_thread(input, prompt)


async def run_console_loop(
    controller: TaskController,
    *,
    registry: CommandRegistry = command_registry,
    read_line: InputReader = _read_stdin,
    color: bool | None = None,
) -> None:
    """
    Interactive board: load once, then read lines until /exit or EOF.

    A line starting with '/' is a command; any other line becomes the draft
    and is submitted as a new task.
    """
    if color is None:
        color = sys.stdout.isatty()
    controller.color = color

    logger.info("Console client started (api=%s).", getattr(controller.api, "base_url", "?"))
    _print_ts("[CONSOLE] Type a task and press Enter to add it. Use /help for commands, /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    await controller.load()
    print(render_board(controller.state, color=color))

    while True:
        try:
            line = (await read_line(PROMPT)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            if line.startswith("/"):
                reply = await registry.handle(controller, line, emit=emit)
            else:
                controller.set_draft(line)
                task = await controller.add()
                reply = f"Added: {task.text}" if task else controller.state.notice
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(reply)

        if line.split(maxsplit=1)[0].lower() not in _NO_REDRAW:
            print(render_board(controller.state, color=color))

    logger.info("Console client finished.")
