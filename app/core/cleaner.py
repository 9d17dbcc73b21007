"""
Module for cleaning raw transcripts into article prose with an LLM.
"""

from typing import Any, Optional

from langchain.chat_models import init_chat_model

from app.core.prompts import CLEANING_PROMPT
from app.models.schemas import CleanerConfig
from app.utils.error_handling import GenerationFailedError, MissingArgumentError, MissingCredentialError
from app.utils.logger import logging


def first_text_segment(content: Any) -> str:
    """Return the first text segment of a chat model response body."""
    if isinstance(content, str):
        return content
    for block in content or []:
        if isinstance(block, str):
            return block
        if isinstance(block, dict) and block.get("type") == "text":
            return block.get("text", "")
    raise GenerationFailedError("Model response contained no text")


class TranscriptCleaner:
    """Class to handle transcript cleaning operations."""

    def __init__(self, cleaner_config: CleanerConfig, api_key: Optional[str] = None, timeout: float = 300.0):
        """
        Initialize the cleaner.

        Args:
            cleaner_config: Model, provider and output limits
            api_key: Key for the text generation service
            timeout: Request timeout in seconds
        """
        self.cleaner_config = cleaner_config
        self.api_key = api_key
        self.timeout = timeout

    def clean(self, content: str, task: str) -> str:
        """
        Ask the model to carry out ``task`` on ``content``.

        Args:
            content: Raw transcript text
            task: Natural-language instruction

        Returns:
            The model's text, unmodified
        """
        if not content or not task:
            raise MissingArgumentError("Content and task are required")

        if not self.api_key:
            raise MissingCredentialError("Anthropic API key not configured")

        messages = CLEANING_PROMPT.format_messages(task=task, content=content)
        logging.info(f"Cleaning transcript of {len(content)} chars with {self.cleaner_config.model}")

        try:
            llm = init_chat_model(
                model=self.cleaner_config.model,
                model_provider=self.cleaner_config.model_provider,
                api_key=self.api_key,
                max_tokens=self.cleaner_config.max_tokens,
                temperature=self.cleaner_config.temperature,
                timeout=self.timeout,
                max_retries=0,
            )
            response = llm.invoke(messages)
        except Exception as e:
            logging.error(f"Text generation failed: {e}")
            raise GenerationFailedError(str(e) or "Failed to generate content") from e

        return first_text_segment(response.content)
