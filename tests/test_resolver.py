"""
Tests for transcript resolution and the captions-then-Whisper fallback.
"""

import os
import groq
import httpx
import pytest
from unittest.mock import patch, MagicMock

from app.config import Settings
from app.core.resolver import (
    AudioTranscriptionStrategy,
    CaptionStrategy,
    TranscriptResolver,
    TranscriptStrategy,
)
from app.core.youtube_downloader import DownloadError, YouTubeDownloader
from app.models.schemas import TranscriptResult, TranscriptSource
from app.utils.error_handling import (
    InvalidLocatorError,
    MalformedCredentialError,
    MissingCredentialError,
    MissingDependencyError,
    RateLimitedError,
    StrategyUnavailable,
    TranscriptionFailedError,
    TranscriptionTooShortError,
)

WHISPER_TEXT = "This is what the speaker actually said, transcribed from the downloaded audio track."


@pytest.fixture
def mock_groq():
    with patch("app.core.transcriber.Groq") as mock_groq_class:
        mock_groq_class.return_value.audio.transcriptions.create.return_value = WHISPER_TEXT + "\n"
        yield mock_groq_class


@pytest.fixture
def mock_downloader(video_metadata):
    """A downloader that writes real files so cleanup can be checked."""
    downloader = MagicMock(spec=YouTubeDownloader)
    downloader.binary = "yt-dlp"
    downloader.is_available.return_value = True
    downloader.get_media_info.return_value = video_metadata

    def fake_download(url, output_base):
        with open(output_base + ".webm.part", "w") as f:
            f.write("partial")
        path = output_base + ".mp3"
        with open(path, "w") as f:
            f.write("audio")
        return path

    downloader.download_audio.side_effect = fake_download
    return downloader


# Caption strategy

def test_captions_joined_in_order(fake_caption_fetcher):
    fetcher = fake_caption_fetcher(["Hello", "world"])
    strategy = CaptionStrategy(fetcher, min_length=5)

    result = strategy.fetch("abc12345678")

    assert result.text == "Hello world"
    assert result.source is TranscriptSource.NATIVE
    assert result.title == "Video abc12345678"
    assert fetcher.calls == ["abc12345678"]


def test_captions_whitespace_collapsed(fake_caption_fetcher, caption_fragments):
    result = CaptionStrategy(fake_caption_fetcher(caption_fragments)).fetch("abc12345678")

    assert result.text == (
        "Today we are looking at how solar panels turn sunlight into electricity for your home."
    )


@pytest.mark.parametrize("fragments", [[], ["too", "short"]])
def test_captions_empty_or_short_unavailable(fake_caption_fetcher, fragments):
    with pytest.raises(StrategyUnavailable):
        CaptionStrategy(fake_caption_fetcher(fragments)).fetch("abc12345678")


def test_captions_library_error_unavailable(fake_caption_fetcher):
    fetcher = fake_caption_fetcher(error=RuntimeError("Subtitles are disabled for this video"))

    with pytest.raises(StrategyUnavailable, match="Subtitles are disabled"):
        CaptionStrategy(fetcher).fetch("abc12345678")


# Audio transcription strategy

def test_audio_strategy_success(settings, mock_downloader, mock_groq, tmp_path):
    strategy = AudioTranscriptionStrategy(settings, downloader=mock_downloader)

    result = strategy.fetch("abc12345678")

    assert result.text == WHISPER_TEXT
    assert result.source is TranscriptSource.TRANSCRIBED
    assert result.title == "How Solar Panels Work"
    mock_downloader.get_media_info.assert_called_once_with("https://www.youtube.com/watch?v=abc12345678")
    mock_downloader.download_audio.assert_called_once()
    assert os.listdir(tmp_path) == []


def test_audio_strategy_missing_credential(settings, mock_downloader, mock_groq):
    strategy = AudioTranscriptionStrategy(
        settings.model_copy(update={"groq_api_key": None}), downloader=mock_downloader
    )

    with pytest.raises(MissingCredentialError):
        strategy.fetch("abc12345678")

    mock_downloader.get_media_info.assert_not_called()


def test_audio_strategy_missing_ytdlp(settings, mock_downloader, mock_groq):
    mock_downloader.is_available.return_value = False
    strategy = AudioTranscriptionStrategy(settings, downloader=mock_downloader)

    with pytest.raises(MissingDependencyError, match="yt-dlp"):
        strategy.fetch("abc12345678")

    mock_downloader.get_media_info.assert_not_called()


@pytest.mark.parametrize("key", ["   ", "sk-proj-" + "x" * 40, "gsk_abc"])
def test_audio_strategy_malformed_credential_makes_no_calls(settings, mock_downloader, mock_groq, key):
    strategy = AudioTranscriptionStrategy(
        settings.model_copy(update={"groq_api_key": key}), downloader=mock_downloader
    )

    with pytest.raises(MalformedCredentialError):
        strategy.fetch("abc12345678")

    mock_groq.assert_not_called()
    mock_downloader.get_media_info.assert_not_called()
    mock_downloader.download_audio.assert_not_called()


def test_audio_strategy_short_transcript(settings, mock_downloader, mock_groq, tmp_path):
    mock_groq.return_value.audio.transcriptions.create.return_value = "  Music.  "
    strategy = AudioTranscriptionStrategy(settings, downloader=mock_downloader)

    with pytest.raises(TranscriptionTooShortError):
        strategy.fetch("abc12345678")

    assert os.listdir(tmp_path) == []


def test_audio_strategy_remote_error_cleans_up(settings, mock_downloader, mock_groq, tmp_path):
    request = httpx.Request("POST", "https://api.groq.com/openai/v1/audio/transcriptions")
    mock_groq.return_value.audio.transcriptions.create.side_effect = groq.RateLimitError(
        "Rate limit reached", response=httpx.Response(429, request=request), body=None
    )
    strategy = AudioTranscriptionStrategy(settings, downloader=mock_downloader)

    with pytest.raises(RateLimitedError):
        strategy.fetch("abc12345678")

    mock_downloader.download_audio.assert_called_once()
    assert os.listdir(tmp_path) == []


def test_audio_strategy_download_error(settings, mock_downloader, mock_groq, tmp_path):
    def failing_download(url, output_base):
        with open(output_base + ".webm.part", "w") as f:
            f.write("partial")
        raise DownloadError("Failed to download audio: HTTP Error 403")

    mock_downloader.download_audio.side_effect = failing_download
    strategy = AudioTranscriptionStrategy(settings, downloader=mock_downloader)

    with pytest.raises(TranscriptionFailedError, match="HTTP Error 403"):
        strategy.fetch("abc12345678")

    assert os.listdir(tmp_path) == []


def test_audio_strategy_metadata_error(settings, mock_downloader, mock_groq):
    mock_downloader.get_media_info.side_effect = DownloadError("Failed to get video info: Private video")
    strategy = AudioTranscriptionStrategy(settings, downloader=mock_downloader)

    with pytest.raises(TranscriptionFailedError, match="Private video"):
        strategy.fetch("abc12345678")

    mock_downloader.download_audio.assert_not_called()


# Resolver

@pytest.mark.parametrize("locator, message", [
    ("", "No URL provided"),
    ("   ", "No URL provided"),
    ("https://example.com/watch?v=abc", "Invalid YouTube URL"),
])
def test_resolver_invalid_locator(locator, message):
    strategy = MagicMock(spec=TranscriptStrategy)
    resolver = TranscriptResolver([strategy])

    with pytest.raises(InvalidLocatorError, match=message) as excinfo:
        resolver.resolve(locator)

    assert excinfo.value.status_code == 400
    strategy.fetch.assert_not_called()


def test_resolver_native_success_skips_audio(fake_caption_fetcher, caption_fragments, test_video_url):
    audio = MagicMock(spec=TranscriptStrategy)
    resolver = TranscriptResolver([CaptionStrategy(fake_caption_fetcher(caption_fragments)), audio])

    result = resolver.resolve(test_video_url)

    assert result.source is TranscriptSource.NATIVE
    assert result.title == "Video abc12345678"
    audio.fetch.assert_not_called()


def test_resolver_falls_back_exactly_once(fake_caption_fetcher, test_video_url):
    fetcher = fake_caption_fetcher(error=RuntimeError("Could not retrieve a transcript"))
    audio = MagicMock(spec=TranscriptStrategy)
    audio.name = "whisper"
    audio.fetch.return_value = TranscriptResult(
        text=WHISPER_TEXT, title="Real Title", source=TranscriptSource.TRANSCRIBED
    )
    resolver = TranscriptResolver([CaptionStrategy(fetcher), audio])

    result = resolver.resolve(test_video_url)

    assert result.source is TranscriptSource.TRANSCRIBED
    assert result.title == "Real Title"
    assert fetcher.calls == ["abc12345678"]
    audio.fetch.assert_called_once_with("abc12345678")


@pytest.mark.parametrize("fragments", [[], ["short"]])
def test_resolver_short_captions_without_fallback_credential(fake_caption_fetcher, mock_downloader, fragments):
    resolver = TranscriptResolver([
        CaptionStrategy(fake_caption_fetcher(fragments)),
        AudioTranscriptionStrategy(Settings(groq_api_key=None), downloader=mock_downloader),
    ])

    with pytest.raises(MissingCredentialError) as excinfo:
        resolver.resolve("abc12345678")

    assert excinfo.value.status_code == 500


def test_resolver_two_word_captions_fall_back(fake_caption_fetcher):
    fetcher = fake_caption_fetcher(["Hello", "world"])
    audio = MagicMock(spec=TranscriptStrategy)
    audio.fetch.return_value = TranscriptResult(
        text="Hello world, transcribed.", title="Real Title", source=TranscriptSource.TRANSCRIBED
    )

    result = TranscriptResolver([CaptionStrategy(fetcher), audio]).resolve("abc12345678")

    assert result.source is TranscriptSource.TRANSCRIBED
    audio.fetch.assert_called_once_with("abc12345678")


def test_resolver_two_word_captions_with_lower_minimum(fake_caption_fetcher):
    resolver = TranscriptResolver([CaptionStrategy(fake_caption_fetcher(["Hello", "world"]), min_length=1)])

    result = resolver.resolve("abc12345678")

    assert result.text == "Hello world"
    assert result.source is TranscriptSource.NATIVE


def test_resolver_end_to_end_with_whisper(fake_caption_fetcher, settings, mock_downloader, mock_groq, tmp_path):
    fetcher = fake_caption_fetcher([])
    resolver = TranscriptResolver([
        CaptionStrategy(fetcher),
        AudioTranscriptionStrategy(settings, downloader=mock_downloader),
    ])

    result = resolver.resolve("https://youtu.be/abc12345678")

    assert result.used_whisper is True
    assert result.title == "How Solar Panels Work"
    assert len(fetcher.calls) == 1
    mock_downloader.download_audio.assert_called_once()
    assert os.listdir(tmp_path) == []


def test_resolver_all_strategies_exhausted(fake_caption_fetcher):
    resolver = TranscriptResolver([CaptionStrategy(fake_caption_fetcher([]))])

    with pytest.raises(TranscriptionTooShortError):
        resolver.resolve("abc12345678")


def test_resolver_from_settings_order(settings):
    resolver = TranscriptResolver.from_settings(settings)

    assert [type(s) for s in resolver.strategies] == [CaptionStrategy, AudioTranscriptionStrategy]
    assert resolver.strategies[0].min_length == 50
