"""Async HTTP client for the GroupMe REST API and image service."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from groupme_bot.api.endpoints import GroupMeEndpoints
from groupme_bot.api.errors import (
    AuthenticationError,
    RemoteApiError,
    TransportParseError,
    UploadError,
)
from groupme_bot.config import ClientConfig
from groupme_bot.log import get_logger
from groupme_bot.models.attachments import ImageAttachment, LocationAttachment, serialize_attachment

logger = get_logger(__name__)

# Statuses the API answers without a body (e.g. /bots/post returns 202)
_EMPTY_STATUSES = frozenset({202, 204})


def _encode_json(obj: Any) -> Any:
    if isinstance(obj, (LocationAttachment, ImageAttachment)):
        return serialize_attachment(obj)
    if isinstance(obj, BaseModel):
        return obj.model_dump(exclude_none=True)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _is_error_code(code: Any) -> bool:
    # meta.code is numeric in practice but may arrive as a string
    try:
        return float(code) >= 400
    except (TypeError, ValueError):
        return False


def _join_errors(errors: Any) -> str:
    if errors is None:
        return ""
    if isinstance(errors, str):
        errors = [errors]
    return ", ".join(str(err) for err in errors)


class GroupMeClient(GroupMeEndpoints):
    """Single point of contact with GroupMe.

    All operations declared in ``GroupMeEndpoints`` route through
    :meth:`request`. The access token is taken from ``config`` on every call.
    """

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.api_url,
            timeout=config.timeout,
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> GroupMeClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()

    def _access_token(self) -> str:
        token = self.config.access_token
        if not token:
            raise AuthenticationError()
        return token

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send a request to the API.

        Returns the envelope's ``response`` field when present, otherwise the
        parsed body, or ``None`` for 202/204 and empty responses.
        """
        query = {"token": self._access_token(), **(params or {})}
        content = json.dumps(body, default=_encode_json) if body is not None else None

        logger.debug("api_request", method=method, path=path)
        response = await self._http.request(method, path, params=query, content=content)
        logger.debug("api_response", method=method, path=path, status=response.status_code)

        if response.status_code in _EMPTY_STATUSES:
            return None

        text = response.text
        if not text:
            return None

        try:
            data = json.loads(text)
        except ValueError as e:
            logger.warning("api_invalid_json", path=path, status=response.status_code)
            raise TransportParseError(response.status_code, f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            return data

        meta = data.get("meta")
        if isinstance(meta, dict):
            code = meta.get("code")
            if _is_error_code(code):
                errors = _join_errors(meta.get("errors"))
                logger.warning("api_error", path=path, status=response.status_code, code=code, errors=errors)
                raise RemoteApiError(response.status_code, f"API Error: {errors}", data)

        if "response" in data:
            return data["response"]
        return data

    async def upload_picture(self, data: bytes, content_type: str) -> str:
        """Upload raw image bytes to the image service and return the hosted URL."""
        headers = {"X-Access-Token": self._access_token(), "Content-Type": content_type}

        response = await self._http.post(self.config.image_url, content=data, headers=headers)
        if not response.is_success:
            logger.warning("picture_upload_failed", status=response.status_code, reason=response.reason_phrase)
            raise UploadError(response.status_code, f"Image Service Error: {response.reason_phrase}")

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportParseError(response.status_code, f"Invalid JSON response: {e}") from e

        url = payload["payload"]["url"]
        logger.info("picture_uploaded", content_type=content_type, size=len(data))
        return url
