"""
Data models for the YouTube transcript cleaner application.
"""
from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict


class TranscriptSource(str, Enum):
    """Where a transcript came from."""
    NATIVE = "native"
    TRANSCRIBED = "transcribed"


class TranscriptResult(BaseModel):
    """Transcript produced once per request. Never modified after creation."""
    model_config = ConfigDict(frozen=True)

    text: str
    title: str
    source: TranscriptSource

    @property
    def used_whisper(self) -> bool:
        return self.source is TranscriptSource.TRANSCRIBED


class VideoMetadata(BaseModel):
    """Metadata reported by yt-dlp for a single video."""
    video_id: str = ""
    title: str
    duration: Optional[float] = None


class TranscriptionConfig(BaseModel):
    """Configuration for transcription operations."""
    model: str = "whisper-large-v3-turbo"
    language: Optional[str] = None
    prompt: Optional[str] = None
    response_format: str = "text"
    temperature: float = 0.0


class CleanerConfig(BaseModel):
    """Configuration for transcript cleaning operations."""
    model: str = "claude-sonnet-4-5-20250929"
    model_provider: str = "anthropic"
    temperature: Optional[float] = None
    max_tokens: int = 8000
