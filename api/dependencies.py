#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
FastAPI dependency functions for Tubelist services.

The service instances are created once during the application lifespan and
stay None when the YouTube API key is not configured.
"""

from typing import Optional

from exceptions import APIConfigurationError
from services.engine import ChannelVideoEngine
from services.youtube_api import YouTubeAPIClient
from logging_config import StructuredLogger

logger = StructuredLogger(__name__)

# --- Global Service Instances ---
# Populated during the application lifespan startup; read-only afterwards.
api_client: Optional[YouTubeAPIClient] = None
video_engine: Optional[ChannelVideoEngine] = None


def get_video_engine() -> ChannelVideoEngine:
    """Return the initialized ChannelVideoEngine.

    Raises:
        APIConfigurationError: If the engine was not initialized (missing API key).
    """
    if not video_engine:
        logger.error("Dependency Error: Channel video engine not initialized.", exc_info=False)
        raise APIConfigurationError()
    return video_engine
