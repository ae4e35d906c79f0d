"""
Tests for the exceptions module.
"""
import unittest
import sys
import os
from fastapi import HTTPException

# Add the parent directory to the path so we can import the application modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from exceptions import (
    AppBaseError, InvalidInputError, APIConfigurationError, ChannelResolutionError,
    UpstreamAPIError, UpstreamTimeoutError, GENERIC_ERROR_MESSAGE, handle_exception
)


class TestAppBaseError(unittest.TestCase):
    """Test cases for the AppBaseError class."""

    def test_app_base_error_defaults(self):
        """Test the default values of AppBaseError."""
        error = AppBaseError("Test error")
        self.assertEqual(str(error), "Test error")
        self.assertEqual(error.error_code, "APPBASEERROR")
        self.assertEqual(error.http_status_code, 500)

    def test_app_base_error_custom_values(self):
        """Test custom values for AppBaseError."""
        error = AppBaseError("Custom error", error_code="CUSTOM_ERROR", http_status_code=400)
        self.assertEqual(str(error), "Custom error")
        self.assertEqual(error.error_code, "CUSTOM_ERROR")
        self.assertEqual(error.http_status_code, 400)


class TestSpecificErrors(unittest.TestCase):
    """Test cases for specific error classes."""

    def test_invalid_input_error(self):
        """Test InvalidInputError."""
        error = InvalidInputError("channelUrl query parameter is required.")
        self.assertEqual(str(error), "channelUrl query parameter is required.")
        self.assertEqual(error.error_code, "INVALID_INPUT")
        self.assertEqual(error.http_status_code, 400)

    def test_api_configuration_error(self):
        """Test APIConfigurationError default message."""
        error = APIConfigurationError()
        self.assertEqual(str(error), "YOUTUBE_API_KEY is not configured on the server.")
        self.assertEqual(error.error_code, "API_CONFIG_ERROR")
        self.assertEqual(error.http_status_code, 500)

    def test_channel_resolution_error(self):
        """Test ChannelResolutionError."""
        error = ChannelResolutionError()
        self.assertEqual(str(error), "Channel not found for this URL.")
        self.assertEqual(error.error_code, "CHANNEL_RESOLUTION_ERROR")
        self.assertEqual(error.http_status_code, 500)

    def test_upstream_api_error(self):
        """Test UpstreamAPIError keeps the upstream status apart from the response status."""
        error = UpstreamAPIError("Daily Limit Exceeded", upstream_status=403)
        self.assertEqual(str(error), "Daily Limit Exceeded")
        self.assertEqual(error.error_code, "UPSTREAM_API_ERROR")
        self.assertEqual(error.http_status_code, 500)
        self.assertEqual(error.upstream_status, 403)

    def test_upstream_timeout_error(self):
        """Test UpstreamTimeoutError."""
        error = UpstreamTimeoutError()
        self.assertIsInstance(error, UpstreamAPIError)
        self.assertEqual(error.error_code, "UPSTREAM_TIMEOUT")
        self.assertEqual(error.http_status_code, 500)
        self.assertIsNone(error.upstream_status)


class TestHandleException(unittest.TestCase):
    """Test cases for the handle_exception function."""

    def test_handle_app_base_error(self):
        """Test handling of AppBaseError."""
        error = InvalidInputError("Invalid input")
        http_exception = handle_exception(error)
        self.assertIsInstance(http_exception, HTTPException)
        self.assertEqual(http_exception.status_code, 400)
        self.assertEqual(http_exception.detail, "Invalid input")
        self.assertEqual(http_exception.headers["X-Error-Code"], "INVALID_INPUT")

    def test_handle_app_base_error_without_message(self):
        """Test the generic fallback when an application error has an empty message."""
        http_exception = handle_exception(UpstreamAPIError(""))
        self.assertEqual(http_exception.status_code, 500)
        self.assertEqual(http_exception.detail, GENERIC_ERROR_MESSAGE)

    def test_handle_http_exception(self):
        """Test handling of HTTPException."""
        original = HTTPException(status_code=404, detail="Not found")
        self.assertIs(handle_exception(original), original)

    def test_handle_generic_exception(self):
        """Test handling of generic exceptions."""
        http_exception = handle_exception(ValueError("Generic error"))
        self.assertEqual(http_exception.status_code, 500)
        self.assertEqual(http_exception.detail, "Generic error")
        self.assertEqual(http_exception.headers["X-Error-Code"], "INTERNAL_SERVER_ERROR")

    def test_handle_exception_without_message(self):
        """Test the generic fallback for exceptions with no message."""
        http_exception = handle_exception(RuntimeError())
        self.assertEqual(http_exception.status_code, 500)
        self.assertEqual(http_exception.detail, "Something went wrong.")


if __name__ == '__main__':
    unittest.main()
