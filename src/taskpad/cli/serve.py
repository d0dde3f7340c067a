# src/taskpad/cli/serve.py

"""
API server entrypoint.

Initializes logging, builds the store and the FastAPI app, then runs uvicorn.
"""

from __future__ import annotations

import logging

import uvicorn

from ..cli.bootstrap import create_server_app
from ..config import get_settings
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    console_level = level_from_name(settings.log_level)
    setup_logging(log_dir=settings.data_dir, log_file="server.log", console_level=console_level)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    app = create_server_app(settings=settings)

    logger.info(
        "Starting %s API on http://%s:%s (store=%s)",
        settings.app_name,
        settings.host,
        settings.port,
        settings.tasks_db_path,
    )

    # log_config=None: uvicorn logs go through the root handlers configured above.
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    logger.info("Bye.")


if __name__ == "__main__":
    main()
