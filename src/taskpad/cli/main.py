# src/taskpad/cli/main.py

"""
Console client entrypoint.

Initializes logging, builds the API client and controller, then runs the
interactive board until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_controller
from ..client.api import TaskApiClient
from ..config import get_settings
from ..logging_setup import level_from_name, setup_logging
from .console import run_console_loop

logger = logging.getLogger(__name__)


async def _run(settings) -> None:
    async with TaskApiClient(settings.api_base_url) as api:
        controller = create_controller(settings=settings, api=api)
        await run_console_loop(controller)


def main() -> None:
    settings = get_settings()

    # The board owns the terminal and shows failed actions itself: only errors on the console.
    console_level = max(level_from_name(settings.log_level), logging.ERROR)
    setup_logging(log_dir=settings.data_dir, log_file="client.log", console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    logger.info("Starting %s console (api=%s)...", settings.app_name, settings.api_base_url)

    try:
        asyncio.run(_run(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
