"""
API routes for the YouTube transcript cleaner application.
"""

import shutil
from functools import lru_cache

from fastapi import APIRouter, Depends

from app.api.schems import (
    CleanRequest,
    CleanResponse,
    HealthResponse,
    TranscriptRequest,
    TranscriptResponse,
)
from app.config import Settings, load_settings
from app.core.cleaner import TranscriptCleaner
from app.core.resolver import TranscriptResolver
from app.models.schemas import CleanerConfig
from app.utils.logger import logging

router = APIRouter(prefix="/api/v1", tags=["transcripts"])


@lru_cache()
def get_settings() -> Settings:
    """Settings are read from the environment once per process."""
    return load_settings()


@lru_cache(maxsize=8)
def _build_resolver(settings: Settings) -> TranscriptResolver:
    return TranscriptResolver.from_settings(settings)


def get_resolver(settings: Settings = Depends(get_settings)) -> TranscriptResolver:
    """One resolver, and so one caption HTTP session, per settings value."""
    return _build_resolver(settings)


def get_cleaner(settings: Settings = Depends(get_settings)) -> TranscriptCleaner:
    return TranscriptCleaner(
        CleanerConfig(
            model=settings.cleaner_model,
            model_provider=settings.cleaner_provider,
            max_tokens=settings.cleaner_max_tokens,
        ),
        api_key=settings.anthropic_api_key,
        timeout=settings.generation_timeout,
    )


# Plain ``def`` routes run in the threadpool, so the blocking calls below are fine.
@router.post("/transcript", response_model=TranscriptResponse)
def fetch_transcript(
    request: TranscriptRequest,
    resolver: TranscriptResolver = Depends(get_resolver),
):
    """
    Get a transcript for a YouTube video.

    - Tries the video's own captions first
    - Falls back to downloading the audio and transcribing it with Whisper
    """
    logging.info(f"Transcript requested for: {request.url}")
    result = resolver.resolve(request.url)
    return TranscriptResponse.from_result(result)


@router.post("/clean", response_model=CleanResponse)
def clean_transcript(
    request: CleanRequest,
    cleaner: TranscriptCleaner = Depends(get_cleaner),
):
    """Rewrite transcript text according to the given task."""
    result = cleaner.clean(request.content, request.task)
    return CleanResponse(result=result)


@router.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)):
    """Report which optional pieces are configured, without echoing secrets."""
    return HealthResponse(
        anthropic_configured=bool(settings.anthropic_api_key),
        groq_configured=bool(settings.groq_api_key),
        ytdlp_available=shutil.which(settings.ytdlp_binary) is not None,
    )
