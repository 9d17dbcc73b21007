"""
Transcript resolution: native captions first, Whisper transcription second.

The fallback policy is the ordered ``strategies`` list. A strategy that finds
nothing usable raises ``StrategyUnavailable`` and the next one is tried; any
``TranscriptAppError`` ends the run immediately.
"""

from typing import List, Optional

from app.config import Settings
from app.core.captions import CaptionFetcher
from app.core.transcriber import AudioTranscriber
from app.core.youtube_downloader import DownloadError, YouTubeDownloader
from app.models.schemas import TranscriptionConfig, TranscriptResult, TranscriptSource
from app.utils.error_handling import (
    InvalidLocatorError,
    MissingCredentialError,
    MissingDependencyError,
    StrategyUnavailable,
    TranscriptAppError,
    TranscriptionFailedError,
    TranscriptionTooShortError,
)
from app.utils.helpers import (
    extract_video_id,
    format_duration,
    join_fragments,
    placeholder_title,
    temporary_audio_path,
    watch_url,
)
from app.utils.logger import logging


class TranscriptStrategy:
    """One attempt at turning a video ID into a transcript."""

    name = "strategy"

    def fetch(self, video_id: str) -> TranscriptResult:
        raise NotImplementedError


class CaptionStrategy(TranscriptStrategy):
    """Zero-cost path through the video's own captions."""

    name = "captions"

    def __init__(self, fetcher: CaptionFetcher, min_length: int = 50):
        self.fetcher = fetcher
        self.min_length = min_length

    def fetch(self, video_id: str) -> TranscriptResult:
        logging.info(f"Attempting to fetch native YouTube transcript for {video_id}")
        try:
            fragments = self.fetcher.fetch(video_id)
        except Exception as e:
            raise StrategyUnavailable(f"Native transcript unavailable: {e}") from e

        text = join_fragments(fragments)
        if len(text) < self.min_length:
            raise StrategyUnavailable("Native transcript unavailable or too short")

        logging.info("Native transcript found")
        # yt-dlp is never consulted on this path, so the real title is unknown
        return TranscriptResult(
            text=text,
            title=placeholder_title(video_id),
            source=TranscriptSource.NATIVE,
        )


class AudioTranscriptionStrategy(TranscriptStrategy):
    """Download the audio track and run it through Whisper."""

    name = "whisper"

    def __init__(
        self,
        settings: Settings,
        downloader: Optional[YouTubeDownloader] = None,
        transcribe_config: Optional[TranscriptionConfig] = None,
    ):
        self.settings = settings
        self.downloader = downloader or YouTubeDownloader(
            binary=settings.ytdlp_binary,
            metadata_timeout=settings.metadata_timeout,
            download_timeout=settings.download_timeout,
        )
        self.transcribe_config = transcribe_config or TranscriptionConfig(model=settings.transcription_model)

    def _check_environment(self) -> AudioTranscriber:
        if not self.settings.groq_api_key:
            raise MissingCredentialError(
                "No transcript available for this video, and the Groq API key is not "
                "configured for Whisper fallback."
            )
        if not self.downloader.is_available():
            raise MissingDependencyError(
                f"No transcript available. Whisper fallback requires {self.downloader.binary} "
                "to be installed (pip install yt-dlp)."
            )
        return AudioTranscriber(
            self.transcribe_config,
            api_key=self.settings.groq_api_key,
            timeout=self.settings.transcription_timeout,
        )

    def fetch(self, video_id: str) -> TranscriptResult:
        transcriber = self._check_environment()
        url = watch_url(video_id)

        try:
            info = self.downloader.get_media_info(url)
            logging.info(f"Using Whisper for: {info.title} ({format_duration(info.duration)})")

            with temporary_audio_path(self.settings.temp_dir) as output_base:
                audio_path = self.downloader.download_audio(url, output_base)
                transcript = transcriber.transcribe(audio_path)
        except DownloadError as e:
            raise TranscriptionFailedError(f"Whisper transcription failed: {e}") from e

        transcript = (transcript or "").strip()
        if len(transcript) < self.settings.min_transcript_length:
            raise TranscriptionTooShortError("Whisper transcription was empty or too short")

        logging.info("Whisper transcription complete")
        return TranscriptResult(
            text=transcript,
            title=info.title or placeholder_title(video_id),
            source=TranscriptSource.TRANSCRIBED,
        )


class TranscriptResolver:
    """Turns a URL or video ID into a transcript by trying each strategy in order."""

    def __init__(self, strategies: List[TranscriptStrategy]):
        self.strategies = strategies

    @classmethod
    def from_settings(cls, settings: Settings) -> "TranscriptResolver":
        return cls([
            CaptionStrategy(
                CaptionFetcher(timeout=settings.caption_timeout),
                min_length=settings.min_transcript_length,
            ),
            AudioTranscriptionStrategy(settings),
        ])

    def resolve(self, locator: str) -> TranscriptResult:
        """
        Resolve a transcript for a YouTube URL or bare video ID.

        Args:
            locator: YouTube URL or 11-character video ID

        Returns:
            TranscriptResult from the first strategy that succeeds
        """
        if not locator or not locator.strip():
            raise InvalidLocatorError("No URL provided")

        video_id = extract_video_id(locator)
        if not video_id:
            raise InvalidLocatorError("Invalid YouTube URL")

        for strategy in self.strategies:
            try:
                return strategy.fetch(video_id)
            except StrategyUnavailable as e:
                logging.warning(f"{strategy.name} gave no transcript for {video_id}: {e}")
            except TranscriptAppError as e:
                logging.error(f"{strategy.name} failed for {video_id}: {e.message}")
                raise

        raise TranscriptionTooShortError("No transcript available for this video")
