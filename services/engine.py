#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Channel video engine for Tubelist.

Runs the per-request pipeline: parse the channel URL, resolve the uploads
playlist, enumerate its video ids, fetch details in batches, then filter by
duration category and shape the results.
"""

import time
import uuid
from typing import List, Union

# Imports from this package
from config import config
from models import VideoCategory, VideoDetail, VideoResult
from services.youtube_api import YouTubeAPIClient, parse_channel_url
from logging_config import StructuredLogger

logger = StructuredLogger(__name__)


def filter_videos(details: List[VideoDetail], category: Union[VideoCategory, str],
                  shorts_max_seconds: int = config.SHORTS_MAX_SECONDS) -> List[VideoDetail]:
    """Keeps the videos belonging to ``category``, preserving order.

    A duration of 0 means unknown, so such videos are neither shorts nor long;
    they only appear under ALL.

    Args:
        details: Videos to filter.
        category: Requested category; unrecognized strings behave as ALL.
        shorts_max_seconds: Exclusive upper bound for shorts.

    Returns:
        list: The kept videos.
    """
    if not isinstance(category, VideoCategory):
        category = VideoCategory.from_param(category)

    if category is VideoCategory.SHORTS:
        return [d for d in details if 0 < (d.duration_seconds or 0) < shorts_max_seconds]
    if category is VideoCategory.LONG:
        return [d for d in details if (d.duration_seconds or 0) >= shorts_max_seconds]
    return list(details)


def to_video_results(details: List[VideoDetail]) -> List[VideoResult]:
    """Projects details to the response shape, adding each watch URL."""
    return [VideoResult.from_detail(detail) for detail in details]


class ChannelVideoEngine:
    """Orchestrator for listing a channel's videos.

    Holds no per-request state; every call to list_channel_videos is independent.
    """

    def __init__(self, api_client: YouTubeAPIClient):
        if not isinstance(api_client, YouTubeAPIClient):
            raise TypeError("api_client must be an instance of YouTubeAPIClient")
        self.api_client = api_client
        logger.info("ChannelVideoEngine initialized.")

    async def list_channel_videos(self, channel_url: str,
                                  category: Union[VideoCategory, str] = VideoCategory.ALL) -> List[VideoResult]:
        """Main processing pipeline for one channel URL.

        Args:
            channel_url: The channel URL provided by the user.
            category: Duration category to keep.

        Returns:
            list: VideoResult entries, most recent upload first.

        Raises:
            ChannelResolutionError: If the URL cannot be parsed or resolved.
            UpstreamAPIError: If any YouTube API call fails.
        """
        if not isinstance(category, VideoCategory):
            category = VideoCategory.from_param(category)

        request_id = str(uuid.uuid4())[:8]
        start_time = time.monotonic()
        req_logger = logger.bind(request_id=request_id)
        req_logger.info(
            f"[REQ-{request_id}] Listing videos for '{channel_url[:100]}' (type={category.value})",
            url=channel_url[:100], category=category.value
        )

        reference = parse_channel_url(channel_url)
        req_logger.debug(f"[REQ-{request_id}] Parsed {reference.kind.value} '{reference.value}'")

        uploads = await self.api_client.resolve_uploads_playlist(reference)
        video_ids = await self.api_client.get_upload_video_ids(uploads)

        if not video_ids:
            req_logger.info(f"[REQ-{request_id}] Channel {uploads.channel_id} has no uploads.")
            return []

        details = await self.api_client.get_video_details_batch(video_ids)
        kept = filter_videos(details, category)
        results = to_video_results(kept)

        req_logger.info(
            f"[REQ-{request_id}] Returning {len(results)}/{len(details)} video(s) for channel {uploads.channel_id}",
            channel_id=uploads.channel_id,
            video_ids=len(video_ids),
            details=len(details),
            returned=len(results),
            processing_time_ms=round((time.monotonic() - start_time) * 1000, 2)
        )
        return results
