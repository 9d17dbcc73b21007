"""
YouTube metadata and audio download through the yt-dlp executable.
"""

import os
import json
import shutil
import subprocess
from typing import List

from app.models.schemas import VideoMetadata
from app.utils.logger import logging


class DownloadError(RuntimeError):
    """yt-dlp failed, timed out or produced no output."""


class YouTubeDownloader:
    """Class to handle probing and downloading YouTube audio with yt-dlp."""

    def __init__(self, binary: str = "yt-dlp", metadata_timeout: float = 60.0, download_timeout: float = 600.0):
        """
        Initialize the downloader.

        Args:
            binary: Name or path of the yt-dlp executable
            metadata_timeout: Seconds allowed for the metadata probe
            download_timeout: Seconds allowed for the audio download
        """
        self.binary = binary
        self.metadata_timeout = metadata_timeout
        self.download_timeout = download_timeout

    def is_available(self) -> bool:
        """Whether the yt-dlp executable can be found."""
        return shutil.which(self.binary) is not None

    def _run(self, args: List[str], timeout: float, action: str) -> str:
        try:
            completed = subprocess.run(
                [self.binary, *args],
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout,
            )
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip() or f"exit code {e.returncode}"
            raise DownloadError(f"Failed to {action}: {detail}") from e
        except subprocess.TimeoutExpired as e:
            raise DownloadError(f"Failed to {action}: timed out after {timeout:.0f}s") from e
        return completed.stdout

    def get_media_info(self, url: str) -> VideoMetadata:
        """
        Probe video metadata without downloading.

        Args:
            url: YouTube video URL

        Returns:
            VideoMetadata with id, title and duration
        """
        output = self._run(["--dump-json", "--no-playlist", url], self.metadata_timeout, "get video info")
        try:
            info = json.loads(output)
        except json.JSONDecodeError as e:
            raise DownloadError(f"Failed to get video info: {e}") from e

        return VideoMetadata(
            video_id=info.get("id") or "",
            title=info.get("title") or "",
            duration=info.get("duration"),
        )

    def download_audio(self, url: str, output_base: str) -> str:
        """
        Download the audio track as mp3.

        Args:
            url: YouTube video URL
            output_base: Output path without extension

        Returns:
            Path to the downloaded mp3 file
        """
        output_path = f"{output_base}.mp3"
        logging.info(f"Downloading audio with yt-dlp to: {output_path}")

        self._run(
            [
                "-x",
                "--audio-format", "mp3",
                "--audio-quality", "5",
                "--no-playlist",
                "-o", f"{output_base}.%(ext)s",
                url,
            ],
            self.download_timeout,
            "download audio",
        )

        if not os.path.isfile(output_path):
            raise DownloadError("yt-dlp ran but no audio file was produced.")

        logging.info("Audio downloaded.")
        return output_path
