"""Exceptions raised by the GroupMe API client."""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Base class for failures reported by the client.

    ``response_json`` holds the parsed response body when the remote service
    sent one, otherwise ``None``.
    """

    def __init__(self, status_code: int, message: str, response_json: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.response_json = response_json

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(status_code={self.status_code}, message={self.message!r})"


class AuthenticationError(ApiError):
    """No access token was configured."""

    def __init__(self, message: str = "Access token is required. Set ClientConfig.access_token or GM_TOKEN."):
        super().__init__(401, message, None)


class TransportParseError(ApiError):
    """The response body was not valid JSON."""


class RemoteApiError(ApiError):
    """The response envelope reported a failure in its ``meta`` block."""


class UploadError(ApiError):
    """The image service rejected an upload."""
