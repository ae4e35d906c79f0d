#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
API Routes for the Tubelist application using FastAPI.

Defines the channel video listing endpoint, a health check, and the route
serving the frontend page.
"""

import html
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import APIRouter, HTTPException, Query, Response, status
from fastapi.responses import FileResponse, HTMLResponse

from config import config
from exceptions import AppBaseError, InvalidInputError, handle_exception
from models import ErrorResponse, VideoCategory, VideosResponse
from api import dependencies
from logging_config import StructuredLogger

from version import __version__ as app_version


logger = StructuredLogger(__name__)

router = APIRouter()

STATIC_DIR = Path(__file__).parent.parent / "static"

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Missing channelUrl parameter"},
    500: {"model": ErrorResponse, "description": "Configuration, resolution or YouTube API error"},
}

# --- Static File Routes ---

@router.get("/favicon.ico", include_in_schema=False)
async def favicon():
    """Handles browser requests for the favicon."""
    favicon_path = STATIC_DIR / "favicon.ico"
    if favicon_path.is_file():
        return FileResponse(favicon_path, media_type="image/vnd.microsoft.icon")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def get_index_html():
    """Serves the main HTML interface file.

    Raises:
        HTTPException: 500 if the index.html file cannot be found.
    """
    html_file_path = STATIC_DIR / "index.html"
    if not html_file_path.is_file():
        logger.error(f"Interface file 'index.html' not found at expected location: {html_file_path}", exc_info=False)
        raise HTTPException(status_code=500, detail="Web interface file not found.")

    response = FileResponse(html_file_path)
    response.headers["Cache-Control"] = f"public, max-age={config.STATIC_CACHE_MAX_AGE}"
    return response

# --- API Endpoints ---

@router.get(
    "/api/videos",
    response_model=VideosResponse,
    responses=ERROR_RESPONSES,
    summary="List channel videos",
    description="Resolves a YouTube channel URL (/channel/<id>, /user/<name> or /@handle) and lists its uploads, optionally keeping only Shorts (< 60s) or long videos (>= 60s)."
)
async def list_channel_videos(
    channelUrl: Optional[str] = Query(None, description="YouTube channel URL."),
    video_type: Optional[str] = Query("all", alias="type", description="all, shorts or long. Other values behave as all."),
):
    """API endpoint returning the filtered uploads of a channel.

    Raises:
        HTTPException: 400 when channelUrl is missing, 500 for every pipeline failure.
    """
    safe_url = html.escape((channelUrl or "")[:100])
    category = VideoCategory.from_param(video_type)

    try:
        if not channelUrl:
            raise InvalidInputError("channelUrl query parameter is required.")

        # Credential check comes after parameter validation
        engine = dependencies.get_video_engine()

        logger.info(f"Received /api/videos request for: {safe_url} (type={category.value})")
        videos = await engine.list_channel_videos(channelUrl, category)
        return VideosResponse(videos=videos)

    except Exception as e:
        if isinstance(e, AppBaseError) and e.http_status_code < 500:
            logger.warning(f"{type(e).__name__} processing /api/videos for '{safe_url}': {e}")
        elif isinstance(e, AppBaseError):
            logger.error(f"{type(e).__name__} processing /api/videos for '{safe_url}': {e}", exc_info=True)
        else:
            logger.critical(f"Unexpected error processing /api/videos for '{safe_url}': {e}", exc_info=True)
        raise handle_exception(e)


@router.get(
    "/health",
    summary="Health Check",
    description="Reports service status and whether the YouTube API key is configured."
)
async def health_check():
    """Endpoint to check system health."""
    logger.debug("Health check endpoint requested.")
    engine_ready = dependencies.video_engine is not None
    return {
        "status": "healthy" if engine_ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service_version": app_version,
        "components": {
            "api_client": "ready" if dependencies.api_client is not None else "not_configured",
            "video_engine": "ready" if engine_ready else "not_configured",
        }
    }
