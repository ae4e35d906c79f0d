#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Uvicorn server entry point for the Tubelist application.

Handles environment loading (.env), final logging configuration based on environment,
and starts the Uvicorn server process.
"""

import logging
import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from config import config
from logging_config import setup_logging


def load_environment(env_path: Path = Path(".") / ".env") -> None:
    """Load a .env file if present; real environment variables take precedence."""
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path, override=False)
        print(f"Loaded environment variables from: {env_path.resolve()}")
    else:
        print(".env file not found, using system environment variables.")


def main() -> None:
    """Load configuration, configure logging and run the server."""
    # 1. Environment, then configuration read once from it
    load_environment()
    config.load_from_env()

    # 2. Logging
    log_level_console = getattr(logging, os.environ.get("LOG_LEVEL_CONSOLE", "INFO").upper(), logging.INFO)
    log_level_file = getattr(logging, os.environ.get("LOG_LEVEL_FILE", "DEBUG").upper(), logging.DEBUG)
    log_structured = os.environ.get("LOG_STRUCTURED", "true").lower() in ("true", "1", "yes")
    setup_logging(
        log_level_console=log_level_console,
        log_level_file=log_level_file,
        structured=log_structured,
        log_file=config.LOG_FILE or None
    )

    # 3. Missing credential is reported but does not prevent startup
    if not config.API_KEY:
        logging.warning("=" * 80)
        logging.warning(" WARNING: YOUTUBE_API_KEY is not defined.")
        logging.warning(" Please define it in a .env file or as an environment variable.")
        logging.warning(" The server will start, but /api/videos will answer 500.")
        logging.warning("=" * 80)

    debug_mode = os.environ.get("DEBUG", "false").lower() in ("true", "1", "yes")
    uvicorn_log_level = os.environ.get("UVICORN_LOG_LEVEL", "debug" if debug_mode else "info").lower()

    logging.info(f"Starting Uvicorn server on http://{config.HOST}:{config.PORT}")
    uvicorn.run(
        "main:app",
        host=config.HOST,
        port=config.PORT,
        reload=debug_mode,
        log_level=uvicorn_log_level,
    )


if __name__ == "__main__":
    main()
