"""Entry point for running the game via ``python -m timetravel``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered tic-tac-toe web server."""

    host = os.environ.get("TIMETRAVEL_HOST", "0.0.0.0")
    port = int(os.environ.get("TIMETRAVEL_PORT", "8000"))
    log_level = os.environ.get("TIMETRAVEL_LOG_LEVEL", "info").lower()
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "timetravel.ui:app", host=host, port=port, reload=False, log_level=log_level
    )


if __name__ == "__main__":
    main()
