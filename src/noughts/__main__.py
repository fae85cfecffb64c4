"""Entry point for running Noughts via ``python -m noughts``."""

from __future__ import annotations

import logging
import os

import uvicorn


def main() -> None:
    """Start the FastAPI-powered Noughts web server."""

    host = os.environ.get("NOUGHTS_HOST", "0.0.0.0")
    port = int(os.environ.get("NOUGHTS_PORT", "8000"))
    level = os.environ.get("NOUGHTS_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run("noughts.ui:app", host=host, port=port, reload=False)


if __name__ == "__main__":
    main()
