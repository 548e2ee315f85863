#!/usr/bin/env python3
"""
reelrules API starter.

Starts the Application (registry validation fails fast here), then runs
the FastAPI app with uvicorn.
"""

import logging

import uvicorn

from reelrules.app import application
from reelrules.interfaces.api.api_app import api_app

logger = logging.getLogger(__name__)


def main() -> None:
    application.start()
    logger.info(f"Starting reelrules API on {application.api_host}:{application.api_port}...")
    logger.info("  - Rule endpoints: /api/web/rules/*")

    uvicorn.run(
        api_app,
        host=application.api_host,
        port=application.api_port,
        timeout_keep_alive=90,
        log_level=application.log_level.lower(),
    )


if __name__ == "__main__":
    main()
