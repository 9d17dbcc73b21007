"""
Native caption retrieval using youtube-transcript-api.
"""

from typing import List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from youtube_transcript_api import YouTubeTranscriptApi, NoTranscriptFound

from app.utils.logger import logging


class _TimeoutAdapter(HTTPAdapter):
    """HTTP adapter applying a default timeout to every request."""

    def __init__(self, timeout: float, *args, **kwargs):
        self.timeout = timeout
        super().__init__(*args, **kwargs)

    def send(self, request, **kwargs):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


class CaptionFetcher:
    """Fetches creator-supplied or auto-generated captions for a video."""

    def __init__(
        self,
        languages: Sequence[str] = ("en",),
        timeout: float = 30.0,
        api: Optional[YouTubeTranscriptApi] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            languages: Preferred caption languages, in priority order
            timeout: Per-request timeout in seconds
            api: Pre-built client (mostly for tests)
        """
        self.languages = list(languages)
        if api is None:
            session = requests.Session()
            adapter = _TimeoutAdapter(timeout)
            session.mount("https://", adapter)
            session.mount("http://", adapter)
            api = YouTubeTranscriptApi(http_client=session)
        self.api = api

    def fetch(self, video_id: str) -> List[str]:
        """
        Fetch caption fragments for a video.

        Falls back to the first listed track when none of the preferred
        languages is available.

        Args:
            video_id: YouTube video ID

        Returns:
            Caption texts in playback order
        """
        try:
            fetched = self.api.fetch(video_id, languages=self.languages)
        except NoTranscriptFound:
            logging.debug(f"No {self.languages} captions for {video_id}, trying any available track")
            transcript = next(iter(self.api.list(video_id)))
            fetched = transcript.fetch()

        return [snippet.text for snippet in fetched]
