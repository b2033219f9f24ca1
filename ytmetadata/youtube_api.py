"""Minimal YouTube Data API v3 client: one GET per call, no retries."""

from __future__ import annotations

import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)

BASE_URL = "https://www.googleapis.com/youtube/v3"
DEFAULT_TIMEOUT = 10.0


class YouTubeApiError(Exception):
    """Request to the Data API failed or returned an error payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _error_message(response: requests.Response) -> str:
    """Pull error.message out of an API error body, falling back to the reason."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message")
        if message:
            return message
    return f"{response.status_code} {response.reason}"


class YouTubeClient:
    """Thin wrapper around requests.get with the shared API key."""

    def __init__(
        self,
        api_key: str,
        base_url: str = BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def list(self, resource: str, **params: str) -> dict:
        """
        Call <resource>.list (videos, channels, playlists) and return the JSON body.

        Raises YouTubeApiError on a missing key, transport failure or HTTP error.
        """
        if not self.api_key:
            raise YouTubeApiError("No YouTube API key configured (set YOUTUBE_API_KEY)")

        url = f"{self.base_url}/{resource}"
        logger.info("GET %s %s", resource, params)
        try:
            response = self.session.get(url, params={**params, "key": self.api_key}, timeout=self.timeout)
        except requests.RequestException as e:
            raise YouTubeApiError(f"Request to {resource} failed: {e}") from e

        if not response.ok:
            raise YouTubeApiError(_error_message(response), status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise YouTubeApiError(f"Invalid JSON from {resource}: {e}", status_code=response.status_code) from e
