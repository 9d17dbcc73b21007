"""
Configuration settings for the YouTube transcript cleaner application.
"""

import os
import shutil
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

from app.utils.logger import logging


# Ensure environment variables are loaded
load_dotenv()


def _float_env(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Transcript Cleaner"
    APP_VERSION = "0.1.0"
    APP_DESCRIPTION = "Turns YouTube videos into clean, readable articles"

    # API keys
    ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")

    # External download utility, looked up on PATH at fallback time
    YTDLP_BINARY = os.getenv("YTDLP_BINARY", "yt-dlp")

    # Default models
    DEFAULT_TRANSCRIPTION_MODEL = os.getenv("TRANSCRIPTION_MODEL", "whisper-large-v3-turbo")
    DEFAULT_CLEANER_MODEL = os.getenv("CLEANER_MODEL", "claude-sonnet-4-5-20250929")
    DEFAULT_CLEANER_PROVIDER = os.getenv("CLEANER_PROVIDER", "anthropic")
    CLEANER_MAX_TOKENS = 8000

    # Transcripts shorter than this are treated as unusable
    MIN_TRANSCRIPT_LENGTH = 50

    # Timeouts in seconds
    CAPTION_TIMEOUT = _float_env("CAPTION_TIMEOUT", 30.0)
    METADATA_TIMEOUT = _float_env("METADATA_TIMEOUT", 60.0)
    DOWNLOAD_TIMEOUT = _float_env("DOWNLOAD_TIMEOUT", 600.0)
    TRANSCRIPTION_TIMEOUT = _float_env("TRANSCRIPTION_TIMEOUT", 300.0)
    GENERATION_TIMEOUT = _float_env("GENERATION_TIMEOUT", 300.0)
    CLIENT_TRANSCRIPT_TIMEOUT = _float_env("CLIENT_TRANSCRIPT_TIMEOUT", 900.0)
    CLIENT_CLEAN_TIMEOUT = _float_env("CLIENT_CLEAN_TIMEOUT", 330.0)

    PUBLIC_URL = os.getenv("API_URL") or os.getenv("PUBLIC_URL", "http://localhost:8000")

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        if not cls.ANTHROPIC_API_KEY:
            logging.warning("ANTHROPIC_API_KEY environment variable not set. Transcript cleaning is disabled.")
        if not cls.GROQ_API_KEY:
            logging.info("GROQ_API_KEY not set. Whisper fallback is disabled.")
        if shutil.which(cls.YTDLP_BINARY) is None:
            logging.info(f"{cls.YTDLP_BINARY} not found on PATH. Whisper fallback is disabled.")


class DevelopmentConfig(Config):
    """Development configuration."""

    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    LOG_LEVEL = "INFO"


class Settings(BaseModel):
    """Immutable runtime settings handed to the components that need them."""

    model_config = ConfigDict(frozen=True)

    anthropic_api_key: Optional[str] = None
    groq_api_key: Optional[str] = None
    ytdlp_binary: str = "yt-dlp"
    transcription_model: str = "whisper-large-v3-turbo"
    cleaner_model: str = "claude-sonnet-4-5-20250929"
    cleaner_provider: str = "anthropic"
    cleaner_max_tokens: int = 8000
    min_transcript_length: int = 50
    temp_dir: Optional[str] = None
    caption_timeout: float = 30.0
    metadata_timeout: float = 60.0
    download_timeout: float = 600.0
    transcription_timeout: float = 300.0
    generation_timeout: float = 300.0


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


def load_settings(cfg=None) -> Settings:
    """Build a Settings value from the loaded configuration class."""
    cfg = cfg or config
    return Settings(
        anthropic_api_key=cfg.ANTHROPIC_API_KEY,
        groq_api_key=cfg.GROQ_API_KEY,
        ytdlp_binary=cfg.YTDLP_BINARY,
        transcription_model=cfg.DEFAULT_TRANSCRIPTION_MODEL,
        cleaner_model=cfg.DEFAULT_CLEANER_MODEL,
        cleaner_provider=cfg.DEFAULT_CLEANER_PROVIDER,
        cleaner_max_tokens=cfg.CLEANER_MAX_TOKENS,
        min_transcript_length=cfg.MIN_TRANSCRIPT_LENGTH,
        caption_timeout=cfg.CAPTION_TIMEOUT,
        metadata_timeout=cfg.METADATA_TIMEOUT,
        download_timeout=cfg.DOWNLOAD_TIMEOUT,
        transcription_timeout=cfg.TRANSCRIPTION_TIMEOUT,
        generation_timeout=cfg.GENERATION_TIMEOUT,
    )


# Create a config instance
config = get_config()
