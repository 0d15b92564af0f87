#!/usr/bin/env python3
"""
Startup script for the Caseworker Task Manager API
Runs main:app under uvicorn with host/port taken from the environment
"""

import logging
import os

import uvicorn
from dotenv import load_dotenv

from casetasks.logging_setup import setup_logging

logger = logging.getLogger("start_server")


def main():
    # Load environment variables
    load_dotenv()
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))

    # Server configuration
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "true").lower() == "true"

    logger.info("Starting Task Manager API on %s:%s (reload=%s)", host, port, reload)

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=reload,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
