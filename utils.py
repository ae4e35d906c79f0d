#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Utility helpers for Tubelist.

Duration decoding, id batching, watch URL building and a performance timer
for logging stage durations.
"""

import re
import time
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional, Sequence

from logging_config import StructuredLogger

logger = StructuredLogger(__name__)

WATCH_URL_PREFIX = "https://www.youtube.com/watch?v="

# Only hours, minutes and seconds are captured; day/week components are ignored.
_ISO_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def iso_duration_to_seconds(duration: Optional[Any]) -> int:
    """Decode an ISO 8601 video duration (e.g. 'PT1M30S') into seconds.

    Args:
        duration: Duration string from contentDetails.duration.

    Returns:
        int: Total seconds, or 0 when the value is missing or does not match.
    """
    if not duration or not isinstance(duration, str):
        return 0

    match = _ISO_DURATION_PATTERN.search(duration)
    if not match:
        logger.debug(f"Unrecognized duration format: '{duration[:50]}'", duration=duration[:50])
        return 0

    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    seconds = int(match.group(3) or 0)
    return hours * 3600 + minutes * 60 + seconds


def watch_url(video_id: str) -> str:
    """Build the watch URL for a video id."""
    return f"{WATCH_URL_PREFIX}{video_id}"


def chunked(items: Sequence[str], size: int) -> Iterator[List[str]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` entries.

    Raises:
        ValueError: If size is not positive.
    """
    if size <= 0:
        raise ValueError(f"Chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


# --- Performance Timer ---

@contextmanager
def performance_timer(operation_name: str, threshold_ms: float = 1000.0):
    """Context manager for timing operations with threshold-based logging.

    Logs at DEBUG under the threshold, INFO above it and WARNING above ten
    times the threshold.

    Args:
        operation_name: A descriptive name for the operation being timed.
        threshold_ms: Threshold in milliseconds. Defaults to 1000ms since every
                      timed block here waits on the YouTube API.

    Yields:
        None
    """
    start_time = time.monotonic()
    try:
        yield
    finally:
        duration_ms = (time.monotonic() - start_time) * 1000
        log_data = {
            "operation": operation_name,
            "duration_ms": round(duration_ms, 2),
            "threshold_ms": threshold_ms
        }

        if duration_ms > threshold_ms * 10:
            logger.warning(f"SLOW OPERATION: '{operation_name}' took {duration_ms:.2f}ms", **log_data)
        elif duration_ms > threshold_ms:
            logger.info(f"Performance watch: '{operation_name}' took {duration_ms:.2f}ms", **log_data)
        else:
            logger.debug(f"Performance: '{operation_name}' completed in {duration_ms:.2f}ms", **log_data)
