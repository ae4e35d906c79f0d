#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Pydantic models and Dataclasses for Tubelist API responses
and internal data structures.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from utils import iso_duration_to_seconds, watch_url
from logging_config import StructuredLogger

logger = StructuredLogger(__name__)


class ChannelReferenceKind(Enum):
    """The three ways a channel URL can point at a channel."""

    CHANNEL_ID = "channel_id"
    USERNAME = "username"
    HANDLE = "handle"


@dataclass(frozen=True)
class ChannelReference:
    """A parsed channel URL: which lookup to use and the value to look up."""

    kind: ChannelReferenceKind
    value: str


@dataclass(frozen=True)
class UploadsHandle:
    """A resolved channel and the id of its uploads playlist."""

    channel_id: str
    uploads_playlist_id: str


class VideoCategory(str, Enum):
    """Duration category requested by the client."""

    ALL = "all"
    SHORTS = "shorts"
    LONG = "long"

    @classmethod
    def from_param(cls, value: Optional[str]) -> "VideoCategory":
        """Map a ``type`` query value to a category; unknown values mean ALL."""
        try:
            return cls(value)
        except ValueError:
            if value:
                logger.debug(f"Unrecognized video type '{value}', treating as 'all'.")
            return cls.ALL


@dataclass
class VideoDetail:
    """Title and decoded duration of one video.

    duration_seconds is 0 when the API returned no duration or one that
    could not be decoded.
    """

    id: str
    title: str = ""
    duration_seconds: int = 0

    @classmethod
    def from_api_response(cls, item: dict) -> "VideoDetail":
        """Create a VideoDetail from a videos.list resource item.

        Args:
            item: YouTube API response item for a video

        Returns:
            VideoDetail: New instance populated with API data
        """
        snippet = item.get("snippet") or {}
        content_details = item.get("contentDetails") or {}
        return cls(
            id=item.get("id"),
            title=snippet.get("title") or "",
            duration_seconds=iso_duration_to_seconds(content_details.get("duration")),
        )


class VideoResult(BaseModel):
    """One entry of the /api/videos response."""

    id: str = Field(..., description="YouTube video id.")
    title: str = Field("", description="Video title as returned by the API.")
    durationSeconds: int = Field(
        0,
        ge=0,
        description="Duration in seconds; 0 when the duration is unknown."
    )
    url: str = Field(..., description="Watch URL for the video.")

    @classmethod
    def from_detail(cls, detail: VideoDetail) -> "VideoResult":
        return cls(
            id=detail.id,
            title=detail.title,
            durationSeconds=detail.duration_seconds,
            url=watch_url(detail.id),
        )


class VideosResponse(BaseModel):
    """Successful response of the /api/videos endpoint."""

    videos: List[VideoResult] = Field(
        default_factory=list,
        description="Videos of the channel matching the requested type, most recent first."
    )


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str = Field(
        ...,
        description="Short, client-safe error message."
    )
