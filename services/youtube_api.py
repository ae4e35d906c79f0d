#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
YouTube Data API v3 Client for Tubelist.

Parses channel URLs, resolves a channel to its uploads playlist, pages through
that playlist and fetches video details in batches. Every API call is awaited
on its own; nothing here retries or caches.
"""

import asyncio
import functools
from typing import Any, AsyncGenerator, Dict, List, Optional
from urllib.parse import unquote, urlsplit

from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError
from googleapiclient.http import build_http

# Imports from this package
from config import Config, config
from exceptions import (APIConfigurationError, ChannelResolutionError,
                        UpstreamAPIError, UpstreamTimeoutError)
from models import (ChannelReference, ChannelReferenceKind, UploadsHandle,
                    VideoDetail)
from utils import chunked, performance_timer
from logging_config import StructuredLogger

logger = StructuredLogger(__name__)

INVALID_URL_MESSAGE = "Invalid channel URL."
UNPARSEABLE_URL_MESSAGE = "Could not parse channel from URL."
CHANNEL_NOT_FOUND_MESSAGE = "Channel not found for this URL."
NO_UPLOADS_PLAYLIST_MESSAGE = "Could not find uploads playlist for this channel."


def parse_channel_url(channel_url: str) -> ChannelReference:
    """Classifies a channel URL into a channel id, legacy username or handle reference.

    Rules are tried in order, so ``/channel/UC.../@x`` is a channel id:

    1. ``/channel/<id>`` -> CHANNEL_ID
    2. ``/user/<name>`` -> USERNAME
    3. first path segment starting with ``@`` -> HANDLE (value keeps the ``@``)

    Args:
        channel_url: URL supplied by the user.

    Returns:
        ChannelReference: The parsed reference.

    Raises:
        ChannelResolutionError: "Invalid channel URL." if the string is not an
            absolute URL, "Could not parse channel from URL." if no rule matches.
    """
    try:
        parsed = urlsplit(channel_url)
        # Raises ValueError for a non-numeric or out-of-range port
        parsed.port
    except (TypeError, ValueError, AttributeError) as e:
        logger.debug(f"URL parsing failed: {e}", error=str(e))
        raise ChannelResolutionError(INVALID_URL_MESSAGE) from None

    if not parsed.scheme or not parsed.netloc:
        logger.debug(f"Rejected non-absolute channel URL: '{channel_url[:100]}'")
        raise ChannelResolutionError(INVALID_URL_MESSAGE)

    segments = [unquote(segment) for segment in parsed.path.split("/") if segment]

    if len(segments) >= 2 and segments[0] == "channel":
        return ChannelReference(ChannelReferenceKind.CHANNEL_ID, segments[1])
    if len(segments) >= 2 and segments[0] == "user":
        return ChannelReference(ChannelReferenceKind.USERNAME, segments[1])

    handle = next((segment for segment in segments if segment.startswith("@")), None)
    if handle:
        return ChannelReference(ChannelReferenceKind.HANDLE, handle)

    logger.debug(f"No channel reference found in path '{parsed.path[:100]}'")
    raise ChannelResolutionError(UNPARSEABLE_URL_MESSAGE)


class YouTubeAPIClient:
    """Client for the parts of the YouTube Data API v3 needed to list a channel's uploads.

    The underlying googleapiclient calls are blocking; each one runs in the
    default executor under the configured timeout. httplib2.Http objects are
    not thread-safe, so every call executes on its own transport.
    """

    # channels.list selector for each reference kind
    CHANNEL_LOOKUP_PARAMS: Dict[ChannelReferenceKind, str] = {
        ChannelReferenceKind.CHANNEL_ID: "id",
        ChannelReferenceKind.HANDLE: "forHandle",
        ChannelReferenceKind.USERNAME: "forUsername",
    }

    def __init__(self, api_key: Optional[str] = None, settings: Config = config):
        """Initialize the YouTube API client.

        Args:
            api_key: YouTube Data API key. Falls back to ``settings.API_KEY``.
            settings: Configuration object providing batch sizes and timeouts.

        Raises:
            APIConfigurationError: If the API key is missing or the client cannot be built.
        """
        logger.info("Initializing YouTube API Client...")
        self.settings = settings
        self.api_key = api_key if api_key is not None else settings.API_KEY

        if not self.api_key:
            logger.critical("YouTube API key is missing.", exc_info=False)
            raise APIConfigurationError()

        try:
            # cache_discovery=False prevents issues with stale discovery documents
            self.youtube: Resource = build("youtube", "v3", developerKey=self.api_key, cache_discovery=False)
        except Exception as e:
            logger.critical(f"Error initializing YouTube API client build: {e}", error=str(e))
            raise APIConfigurationError(f"Could not initialize YouTube API service: {e}") from e

        logger.info("YouTube API Client initialized.")

    async def _execute_api_call(self, api_request: Any, operation_name: str) -> dict:
        """Executes one API request in the default executor with a timeout.

        Args:
            api_request: A googleapiclient request object (e.g. youtube.videos().list(...)).
            operation_name: Name used in logs, e.g. "channels.list".

        Returns:
            dict: The parsed JSON response.

        Raises:
            UpstreamTimeoutError: If the call exceeds API_TIMEOUT_SECONDS.
            UpstreamAPIError: If the API answers with an HTTP error.
        """
        timeout = self.settings.API_TIMEOUT_SECONDS
        loop = asyncio.get_running_loop()
        try:
            response = await asyncio.wait_for(
                loop.run_in_executor(None, functools.partial(api_request.execute, http=build_http())),
                timeout=timeout
            )
        except asyncio.TimeoutError:
            logger.error(
                f"'{operation_name}' timed out after {timeout}s",
                operation=operation_name, timeout=timeout, exc_info=False
            )
            raise UpstreamTimeoutError() from None
        except HttpError as http_err:
            status_code = getattr(getattr(http_err, "resp", None), "status", None)
            reason = getattr(http_err, "reason", "") or ""
            logger.error(
                f"HTTP error during '{operation_name}': {status_code} - {reason}",
                operation=operation_name, status=status_code
            )
            message = reason.strip() or f"YouTube API request failed with status {status_code}."
            raise UpstreamAPIError(message, upstream_status=status_code) from http_err

        logger.debug(f"'{operation_name}' succeeded", operation=operation_name)
        return response or {}

    async def resolve_uploads_playlist(self, reference: ChannelReference) -> UploadsHandle:
        """Resolves a channel reference to its uploads playlist with one channels.list call.

        Args:
            reference: Parsed channel reference.

        Returns:
            UploadsHandle: Canonical channel id and uploads playlist id.

        Raises:
            ChannelResolutionError: If no channel matches or it has no uploads playlist.
            UpstreamAPIError: Propagated from the API call.
        """
        selector = self.CHANNEL_LOOKUP_PARAMS[reference.kind]
        logger.debug(f"Resolving channel via channels.list {selector}={reference.value}")

        req = self.youtube.channels().list(
            part="id,contentDetails",
            fields="items(id,contentDetails/relatedPlaylists/uploads)",
            **{selector: reference.value}
        )
        with performance_timer("channels.list"):
            resp = await self._execute_api_call(req, "channels.list")

        items = resp.get("items") or []
        if not items:
            logger.warning(f"No channel found for {reference.kind.value} '{reference.value}'")
            raise ChannelResolutionError(CHANNEL_NOT_FOUND_MESSAGE)
        if len(items) > 1:
            logger.warning(f"channels.list returned {len(items)} channels for '{reference.value}', using the first.")

        channel = items[0]
        uploads_playlist_id = ((channel.get("contentDetails") or {})
                               .get("relatedPlaylists") or {}).get("uploads")
        if not uploads_playlist_id:
            logger.warning(f"Channel {channel.get('id')} has no uploads playlist.")
            raise ChannelResolutionError(NO_UPLOADS_PLAYLIST_MESSAGE)

        logger.info(
            f"Resolved {reference.kind.value} '{reference.value}' to channel {channel.get('id')}",
            channel_id=channel.get("id"),
            uploads_playlist_id=uploads_playlist_id
        )
        return UploadsHandle(channel_id=channel.get("id"), uploads_playlist_id=uploads_playlist_id)

    async def _fetch_playlist_page(self, playlist_id: str, page_token: Optional[str]) -> dict:
        """Fetches a single page of playlist items.

        Args:
            playlist_id: The YouTube Playlist ID.
            page_token: The token for the next page, or None for the first page.

        Returns:
            dict: The playlistItems.list response.
        """
        req = self.youtube.playlistItems().list(
            part="contentDetails",
            playlistId=playlist_id,
            maxResults=self.settings.PLAYLIST_PAGE_SIZE,
            pageToken=page_token,
            fields="items(contentDetails/videoId),nextPageToken"
        )
        return await self._execute_api_call(req, "playlistItems.list")

    async def _iter_playlist_pages(self, playlist_id: str) -> AsyncGenerator[dict, None]:
        """Yields playlist pages in order until a page carries no nextPageToken."""
        next_page_token: Optional[str] = None
        while True:
            resp = await self._fetch_playlist_page(playlist_id, next_page_token)
            yield resp
            next_page_token = resp.get("nextPageToken")
            if not next_page_token:
                break

    async def get_upload_video_ids(self, uploads: UploadsHandle) -> List[str]:
        """Collects every video id of the uploads playlist, in playlist order.

        Items without ``contentDetails.videoId`` are skipped. Any API error
        aborts the whole enumeration.

        Args:
            uploads: Resolved uploads handle.

        Returns:
            list: Video ids, most recent upload first.
        """
        playlist_id = uploads.uploads_playlist_id
        video_ids: List[str] = []
        page_count = 0
        skipped = 0

        with performance_timer(f"enumerate_uploads_{playlist_id}"):
            async for page in self._iter_playlist_pages(playlist_id):
                page_count += 1
                items = page.get("items") or []
                for item in items:
                    video_id = (item.get("contentDetails") or {}).get("videoId")
                    if video_id:
                        video_ids.append(video_id)
                    else:
                        skipped += 1
                logger.debug(f"Playlist {playlist_id} page {page_count}: {len(items)} item(s)")

        if skipped:
            logger.warning(
                f"Skipped {skipped} playlist item(s) without a video id in {playlist_id}",
                playlist_id=playlist_id, skipped=skipped
            )
        logger.info(
            f"Collected {len(video_ids)} video id(s) from {page_count} page(s) of {playlist_id}",
            playlist_id=playlist_id, video_count=len(video_ids), pages=page_count
        )
        return video_ids

    async def _fetch_video_details_batch(self, batch_ids: List[str]) -> List[dict]:
        """Fetches details for a single batch of video IDs (max BATCH_SIZE).

        Args:
            batch_ids: List of video IDs.

        Returns:
            list: Video resource items as returned by videos.list.
        """
        req = self.youtube.videos().list(
            part="contentDetails,snippet",
            id=",".join(batch_ids),
            fields="items(id,snippet/title,contentDetails/duration)"
        )
        resp = await self._execute_api_call(req, "videos.list")
        return resp.get("items") or []

    async def get_video_details_batch(self, video_ids: List[str]) -> List[VideoDetail]:
        """Fetches title and duration for each id, in batches, keeping input order.

        Ids the API does not return (private, deleted) are dropped.

        Args:
            video_ids: Ordered list of YouTube video IDs.

        Returns:
            list: VideoDetail objects, batch by batch in input order.
        """
        if not video_ids:
            return []

        batch_size = self.settings.BATCH_SIZE
        details: List[VideoDetail] = []

        with performance_timer("fetch_video_details"):
            for batch_number, batch_ids in enumerate(chunked(video_ids, batch_size), start=1):
                logger.debug(f"Fetching video details batch {batch_number} ({len(batch_ids)} IDs starting with {batch_ids[0]})")
                items = await self._fetch_video_details_batch(batch_ids)

                for item in items:
                    if not item.get("id"):
                        logger.warning("Skipping video item without an id in videos.list response")
                        continue
                    details.append(VideoDetail.from_api_response(item))

                if len(items) < len(batch_ids):
                    logger.debug(f"videos.list returned {len(items)}/{len(batch_ids)} item(s) for batch {batch_number}")

        logger.info(
            f"Retrieved details for {len(details)}/{len(video_ids)} video(s).",
            detail_count=len(details), requested_count=len(video_ids)
        )
        return details
