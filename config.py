#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Configuration module for Tubelist.

Defines configuration parameters and loads values from environment variables.
"""

import os
import logging
from typing import Dict, Any

# Initialize a basic logger for config loading issues
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Default configuration values
_CONFIG_DEFAULTS: Dict[str, Any] = {
    # API Configuration
    "API_KEY": "",
    "API_KEY_ENV_VAR": "YOUTUBE_API_KEY",

    # YouTube API Settings
    "BATCH_SIZE": 50,  # Max ids accepted by videos.list
    "PLAYLIST_PAGE_SIZE": 50,  # Max items per playlistItems.list page
    "SHORTS_MAX_SECONDS": 60,  # Shorts are strictly shorter than this

    # Timeouts
    "API_TIMEOUT_SECONDS": 20.0,  # Timeout for a single API request

    # Web Server
    "HOST": "127.0.0.1",
    "PORT": 3000,
    "DEFAULT_ENCODING": "utf-8",
    "STATIC_CACHE_MAX_AGE": 3600,
    "LOG_FILE": "tubelist_backend.log",

    # CORS
    "ALLOWED_ORIGINS": [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
}


class Config:
    """Configuration class that loads values from environment variables."""

    def __init__(self, load_from_env=True):
        """Initialize configuration with default values and optionally from environment.

        Args:
            load_from_env: Whether to load values from environment variables
        """
        for key, value in _CONFIG_DEFAULTS.items():
            # Copy lists so instances never share mutable defaults
            setattr(self, key, list(value) if isinstance(value, list) else value)

        if load_from_env:
            self.load_from_env()

    def load_from_env(self):
        """Load configuration values from environment variables."""
        self.API_KEY = os.environ.get(self.API_KEY_ENV_VAR, self.API_KEY)
        self.HOST = os.environ.get("HOST", self.HOST)
        self.LOG_FILE = os.environ.get("LOG_FILE", self.LOG_FILE)

        env_origins = os.environ.get("ALLOWED_ORIGINS", "")
        if env_origins:
            origins = [origin.strip() for origin in env_origins.split(",")]
            self.ALLOWED_ORIGINS = [o for o in origins if o]
            logger.info(f"CORS origins set from environment: {self.ALLOWED_ORIGINS}")

        self._load_typed_from_env("PORT")
        self._load_typed_from_env("BATCH_SIZE")
        self._load_typed_from_env("PLAYLIST_PAGE_SIZE")
        self._load_typed_from_env("STATIC_CACHE_MAX_AGE")
        self._load_typed_from_env("API_TIMEOUT_SECONDS", float)

        # videos.list and playlistItems.list both reject more than 50
        if not 0 < self.BATCH_SIZE <= 50:
            logger.warning(f"BATCH_SIZE {self.BATCH_SIZE} out of range, using 50.")
            self.BATCH_SIZE = 50
        if not 0 < self.PLAYLIST_PAGE_SIZE <= 50:
            logger.warning(f"PLAYLIST_PAGE_SIZE {self.PLAYLIST_PAGE_SIZE} out of range, using 50.")
            self.PLAYLIST_PAGE_SIZE = 50

        if not self.API_KEY:
            logger.warning(f"API key not found in env var {self.API_KEY_ENV_VAR}.")

    def _load_typed_from_env(self, key, cast=int):
        """Overrides ``key`` from the environment if the value converts with ``cast``.

        Unconvertible values are logged and the current value is kept.
        """
        env_value = os.environ.get(key)
        if env_value is None:
            return
        try:
            setattr(self, key, cast(env_value))
        except ValueError:
            logger.warning(f"Invalid {cast.__name__} value for {key}: {env_value!r}, keeping {getattr(self, key)!r}")


# Create a single instance of Config to be imported by other modules
config = Config(load_from_env=True)
