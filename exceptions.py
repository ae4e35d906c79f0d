#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Custom exception classes and error handling utilities for Tubelist.

Every failure the pipeline can produce maps to an HTTP status and a short,
client-safe message. Diagnostic detail stays in the server logs.
"""

from typing import Optional
from fastapi import HTTPException, status

GENERIC_ERROR_MESSAGE = "Something went wrong."


# --- Base Exception Class ---

class AppBaseError(Exception):
    """Base class for all application-specific exceptions.

    Attributes:
        message: Human-readable error message, returned to the client verbatim
        error_code: Machine-readable error code
        http_status_code: HTTP status code to use in API responses
    """

    def __init__(self, message: str, error_code: Optional[str] = None,
                http_status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR):
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.http_status_code = http_status_code
        super().__init__(message)

    def to_http_exception(self) -> HTTPException:
        """Convert this exception to a FastAPI HTTPException.

        Returns:
            HTTPException: FastAPI exception with appropriate status and headers
        """
        return HTTPException(
            status_code=self.http_status_code,
            detail=self.message or GENERIC_ERROR_MESSAGE,
            headers={"X-Error-Code": self.error_code}
        )


# --- Request Exceptions ---

class InvalidInputError(AppBaseError):
    """Raised when a required request parameter is missing or unusable."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(
            message=message,
            error_code="INVALID_INPUT",
            http_status_code=status.HTTP_400_BAD_REQUEST
        )


class APIConfigurationError(AppBaseError):
    """Raised when the upstream credential is not configured on the server."""

    def __init__(self, message: str = "YOUTUBE_API_KEY is not configured on the server."):
        super().__init__(
            message=message,
            error_code="API_CONFIG_ERROR",
            http_status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


# --- Pipeline Exceptions ---

class ChannelResolutionError(AppBaseError):
    """Raised when a channel URL cannot be parsed or resolved to an uploads playlist."""

    def __init__(self, message: str = "Channel not found for this URL."):
        super().__init__(
            message=message,
            error_code="CHANNEL_RESOLUTION_ERROR",
            http_status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class UpstreamAPIError(AppBaseError):
    """Raised when the YouTube Data API rejects a request or cannot be reached."""

    def __init__(self, message: str = "YouTube API request failed.",
                 error_code: str = "UPSTREAM_API_ERROR",
                 upstream_status: Optional[int] = None):
        self.upstream_status = upstream_status
        super().__init__(
            message=message,
            error_code=error_code,
            http_status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


class UpstreamTimeoutError(UpstreamAPIError):
    """Raised when a single YouTube Data API call exceeds the configured timeout."""

    def __init__(self, message: str = "YouTube API request timed out."):
        super().__init__(message=message, error_code="UPSTREAM_TIMEOUT")


# --- Error Handling Utilities ---

def handle_exception(exception: Exception) -> HTTPException:
    """Convert any exception to an appropriate HTTPException.

    Unknown exceptions become a 500 carrying their own message, or the
    generic fallback when they have none.

    Args:
        exception: The exception to handle

    Returns:
        HTTPException: FastAPI exception with appropriate status and headers
    """
    if isinstance(exception, AppBaseError):
        return exception.to_http_exception()

    elif isinstance(exception, HTTPException):
        return exception

    else:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exception) or GENERIC_ERROR_MESSAGE,
            headers={"X-Error-Code": "INTERNAL_SERVER_ERROR"}
        )
