"""
Helper utility functions for the YouTube transcript cleaner application.
"""

import os
import re
import glob
import time
import tempfile
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional


# watch?v=, youtu.be/, embed/ and v/ links, then a bare id
VIDEO_ID_PATTERNS = [
    re.compile(
        r"(?:youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/v/)"
        r"([A-Za-z0-9_-]{11})(?![A-Za-z0-9_-])"
    ),
    re.compile(r"^([A-Za-z0-9_-]{11})$"),
]

_WHITESPACE = re.compile(r"\s+")


def extract_video_id(url: str) -> Optional[str]:
    """
    Extract the 11-character video ID from a YouTube URL or bare ID.

    Args:
        url: YouTube URL or video ID

    Returns:
        Video ID or None if no supported shape matches
    """
    if not url:
        return None

    for pattern in VIDEO_ID_PATTERNS:
        match = pattern.search(url.strip())
        if match:
            return match.group(1)

    return None


def watch_url(video_id: str) -> str:
    """Canonical watch URL for a video ID."""
    return f"https://www.youtube.com/watch?v={video_id}"


def placeholder_title(video_id: str) -> str:
    return f"Video {video_id}"


def join_fragments(fragments: Iterable[str]) -> str:
    """
    Join caption fragments in order, collapsing whitespace runs to single spaces.

    Args:
        fragments: Caption texts in playback order

    Returns:
        Single trimmed line of text
    """
    return _WHITESPACE.sub(" ", " ".join(fragments)).strip()


def format_duration(seconds: Optional[float]) -> str:
    if not seconds:
        return "unknown length"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"


@contextmanager
def temporary_audio_path(directory: Optional[str] = None, prefix: str = "whisper_audio") -> Iterator[str]:
    """
    Reserve a unique base path for a downloaded audio file.

    The caller appends an extension. Every file sharing the base name, including
    partial downloads, is removed when the block exits.

    Args:
        directory: Where to place the file (defaults to the system temp dir)
        prefix: File name prefix

    Yields:
        Path without extension
    """
    base_path = os.path.join(directory or tempfile.gettempdir(), f"{prefix}_{time.time_ns()}")
    try:
        yield base_path
    finally:
        for leftover in glob.glob(glob.escape(base_path) + ".*"):
            try:
                os.remove(leftover)
            except FileNotFoundError:
                pass
