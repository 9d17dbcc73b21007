"""
Module for transcribing audio files using Groq's Whisper API.
"""

import os
from pathlib import Path
from typing import Optional

import groq
from groq import Groq

from app.models.schemas import TranscriptionConfig
from app.utils.error_handling import (
    MalformedCredentialError,
    MissingCredentialError,
    RateLimitedError,
    RemoteAuthFailureError,
    TranscriptionFailedError,
)
from app.utils.logger import logging

API_KEY_PREFIX = "gsk_"
MIN_API_KEY_LENGTH = 20


def validate_api_key(api_key: Optional[str]) -> str:
    """
    Check the shape of a Groq API key without contacting Groq.

    Args:
        api_key: Key to check

    Returns:
        The key, stripped of surrounding whitespace
    """
    key = (api_key or "").strip()
    if not key:
        raise MalformedCredentialError("Groq API key is empty.")
    if not key.startswith(API_KEY_PREFIX):
        raise MalformedCredentialError(f"Groq API key should start with '{API_KEY_PREFIX}'.")
    if len(key) < MIN_API_KEY_LENGTH:
        raise MalformedCredentialError("Groq API key is too short. Check that it was copied in full.")
    return key


class AudioTranscriber:
    """Class to handle audio transcription operations."""

    def __init__(
        self,
        transcribe_config: TranscriptionConfig,
        api_key: Optional[str],
        timeout: float = 300.0,
    ):
        """
        Initialize the transcriber. The key is validated here, before any request.

        Args:
            transcribe_config: Model and output options
            api_key: Groq API key
            timeout: Request timeout in seconds
        """
        self.transcribe_config = transcribe_config
        if not api_key:
            raise MissingCredentialError("Groq API key is not configured for Whisper transcription.")
        self.api_key = validate_api_key(api_key)

        self.client = Groq(api_key=self.api_key, timeout=timeout, max_retries=0)

    def transcribe(self, audio_path: str) -> str:
        """
        Transcribe an audio file to plain text.

        Args:
            audio_path: Path to the audio file

        Returns:
            Transcript text as returned by the service
        """
        if not os.path.exists(audio_path) or not os.path.isfile(audio_path):
            raise FileNotFoundError(f"Audio file not found at {audio_path}")

        audio_file_path = Path(audio_path)
        logging.info(f"Transcribing audio file: {audio_path}")

        options = {}
        if self.transcribe_config.prompt:
            options["prompt"] = self.transcribe_config.prompt
        if self.transcribe_config.language:
            options["language"] = self.transcribe_config.language

        try:
            with open(audio_path, "rb") as audio_file:
                transcription = self.client.audio.transcriptions.create(
                    file=(audio_file_path.name, audio_file.read()),
                    model=self.transcribe_config.model,
                    response_format=self.transcribe_config.response_format,
                    temperature=self.transcribe_config.temperature,
                    **options,
                )
        except groq.AuthenticationError as e:
            raise RemoteAuthFailureError("Invalid Groq API key for Whisper transcription") from e
        except groq.RateLimitError as e:
            raise RateLimitedError("Groq rate limit reached. Please try again later.") from e
        except groq.APIError as e:
            raise TranscriptionFailedError(f"Whisper transcription failed: {e}") from e

        logging.info("Transcription complete.")

        # "text" responses come back as a bare string, json ones as an object
        if isinstance(transcription, str):
            return transcription
        return transcription.text
