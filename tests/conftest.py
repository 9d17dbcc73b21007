"""
Configuration for pytest tests.
"""

import os
import pytest

from app.config import Settings
from app.models.schemas import VideoMetadata

VALID_GROQ_KEY = "gsk_" + "a1B2c3D4" * 6

CAPTION_FRAGMENTS = [
    "Today we are looking at how",
    "  solar panels turn\nsunlight into",
    "electricity for your home.",
]


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Keep real credentials out of the test run."""
    saved = {key: os.environ.pop(key, None) for key in ("ANTHROPIC_API_KEY", "GROQ_API_KEY")}
    os.environ["ENVIRONMENT"] = "development"

    yield

    for key, value in saved.items():
        if value is not None:
            os.environ[key] = value


@pytest.fixture
def test_video_url():
    """Return a test YouTube video URL."""
    return "https://www.youtube.com/watch?v=abc12345678"


@pytest.fixture
def settings(tmp_path):
    """Fully configured settings with temp files kept under tmp_path."""
    return Settings(
        anthropic_api_key="test-anthropic-key",
        groq_api_key=VALID_GROQ_KEY,
        temp_dir=str(tmp_path),
    )


@pytest.fixture
def video_metadata():
    return VideoMetadata(video_id="abc12345678", title="How Solar Panels Work", duration=754)


class FakeCaptionFetcher:
    """Stands in for CaptionFetcher and counts calls."""

    def __init__(self, fragments=None, error=None):
        self.fragments = fragments or []
        self.error = error
        self.calls = []

    def fetch(self, video_id):
        self.calls.append(video_id)
        if self.error:
            raise self.error
        return list(self.fragments)


@pytest.fixture
def caption_fragments():
    return list(CAPTION_FRAGMENTS)


@pytest.fixture
def fake_caption_fetcher():
    """Factory for FakeCaptionFetcher instances."""
    return FakeCaptionFetcher
