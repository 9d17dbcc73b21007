from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.schemas import TranscriptResult


class TranscriptRequest(BaseModel):
    """Model for requesting a video transcript."""
    url: Optional[str] = ""


class TranscriptResponse(BaseModel):
    """Model for transcript responses."""
    model_config = ConfigDict(populate_by_name=True)

    content: str
    title: str
    used_whisper: bool = Field(alias="usedWhisper")

    @classmethod
    def from_result(cls, result: TranscriptResult) -> "TranscriptResponse":
        return cls(content=result.text, title=result.title, used_whisper=result.used_whisper)


class CleanRequest(BaseModel):
    """Model for transcript cleaning requests."""
    content: Optional[str] = ""
    task: Optional[str] = ""


class CleanResponse(BaseModel):
    result: str


class HealthResponse(BaseModel):
    status: str = "ok"
    anthropic_configured: bool
    groq_configured: bool
    ytdlp_available: bool
