"""
API client for communicating with the YouTube transcript cleaner backend.
"""

import requests
from typing import Any, Dict, Optional
from urllib.parse import urljoin
from app.config import config

FALLBACK_ERROR = "Failed to process video"


class ApiError(Exception):
    """A backend call failed; ``message`` is fit to show to the user."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """Client for interacting with the YouTube transcript cleaner API."""

    def __init__(
        self,
        base_url: str = config.PUBLIC_URL,
        transcript_timeout: float = config.CLIENT_TRANSCRIPT_TIMEOUT,
        clean_timeout: float = config.CLIENT_CLEAN_TIMEOUT,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API
            transcript_timeout: Seconds to wait for a transcript
            clean_timeout: Seconds to wait for a cleaning call
        """
        self.base_url = base_url
        self.api_base = urljoin(base_url, "/api/v1/")
        self.transcript_timeout = transcript_timeout
        self.clean_timeout = clean_timeout

    def _url(self, endpoint: str) -> str:
        """Get the full URL for an endpoint."""
        return urljoin(self.api_base, endpoint)

    def _post(self, endpoint: str, payload: Dict[str, Any], timeout: float) -> Dict[str, Any]:
        try:
            response = requests.post(self._url(endpoint), json=payload, timeout=timeout)
        except requests.RequestException as e:
            raise ApiError(str(e)) from e

        if response.status_code >= 400:
            try:
                message = response.json().get("error")
            except (ValueError, AttributeError):
                message = None
            raise ApiError(message or FALLBACK_ERROR, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(FALLBACK_ERROR, response.status_code) from e
        if not isinstance(data, dict):
            raise ApiError(FALLBACK_ERROR, response.status_code)
        return data

    @staticmethod
    def _field(data: Dict[str, Any], name: str) -> Any:
        if name not in data:
            raise ApiError(FALLBACK_ERROR)
        return data[name]

    def fetch_transcript(self, url: str) -> Dict[str, Any]:
        """
        Request the raw transcript for a video.

        Args:
            url: YouTube video URL

        Returns:
            Dictionary with content, title and usedWhisper
        """
        data = self._post("transcript", {"url": url}, self.transcript_timeout)
        for name in ("content", "title"):
            self._field(data, name)
        return data

    def clean_transcript(self, content: str, task: str) -> str:
        """
        Request a cleaned version of a transcript.

        Args:
            content: Raw transcript text
            task: Cleaning instruction

        Returns:
            The cleaned text
        """
        data = self._post("clean", {"content": content, "task": task}, self.clean_timeout)
        return self._field(data, "result")
