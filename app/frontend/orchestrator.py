"""
Client-side sequencing of the transcript and cleaning calls.
"""

from enum import Enum
from typing import Callable, Optional

from app.core.prompts import ARTICLE_CLEANUP_TASK
from app.frontend.api_client import ApiClient, ApiError
from app.utils.logger import logging


class PipelineState(str, Enum):
    IDLE = "idle"
    FETCHING_TRANSCRIPT = "fetching_transcript"
    CLEANING_TRANSCRIPT = "cleaning_transcript"
    COMPLETE = "complete"
    FAILED = "failed"


class PipelineBusyError(RuntimeError):
    """A run was started while another was still in flight."""


class TranscriptPipeline:
    """
    Drives one user-initiated run: fetch the transcript, then clean it.

    A failed transcript fetch stops the run before cleaning. A failed cleaning
    call keeps the raw transcript so the user can still read it.
    """

    ACTIVE_STATES = (PipelineState.FETCHING_TRANSCRIPT, PipelineState.CLEANING_TRANSCRIPT)

    def __init__(self, client: ApiClient, task: str = ARTICLE_CLEANUP_TASK):
        self.client = client
        self.task = task
        self.reset()

    @property
    def busy(self) -> bool:
        return self.state in self.ACTIVE_STATES

    def reset(self):
        """Return to idle and drop all results and errors."""
        self.state = PipelineState.IDLE
        self.progress_label = ""
        self.raw_transcript: Optional[str] = None
        self.cleaned_transcript: Optional[str] = None
        self.video_title: Optional[str] = None
        self.used_whisper = False
        self.error: Optional[str] = None

    def _enter(self, state: PipelineState, label: str, on_progress: Optional[Callable[[str], None]]):
        self.state = state
        self.progress_label = label
        if on_progress:
            on_progress(label)

    def _fail(self, message: str):
        logging.error(f"Run failed while {self.state.value}: {message}")
        self.state = PipelineState.FAILED
        self.progress_label = ""
        self.error = message

    def run(self, url: str, on_progress: Optional[Callable[[str], None]] = None) -> PipelineState:
        """
        Fetch and clean the transcript for ``url``.

        Args:
            url: YouTube URL or video ID entered by the user
            on_progress: Called with each progress label

        Returns:
            The final state, COMPLETE or FAILED
        """
        if self.busy:
            raise PipelineBusyError("A run is already in progress")

        if not url or not url.strip():
            self.error = "Please enter a YouTube URL"
            return self.state

        self.reset()
        try:
            self._enter(PipelineState.FETCHING_TRANSCRIPT, "Fetching transcript...", on_progress)
            try:
                transcript = self.client.fetch_transcript(url.strip())
                self.raw_transcript = transcript["content"]
                self.video_title = transcript["title"]
                self.used_whisper = bool(transcript.get("usedWhisper", False))
            except ApiError as e:
                self._fail(e.message)
                return self.state
            except Exception as e:
                self._fail(f"Unexpected transcript response: {e}")
                return self.state

            self._enter(PipelineState.CLEANING_TRANSCRIPT, "Cleaning transcript with AI...", on_progress)
            try:
                self.cleaned_transcript = self.client.clean_transcript(self.raw_transcript, self.task)
            except ApiError as e:
                self._fail(e.message)
                return self.state
            except Exception as e:
                self._fail(f"Unexpected cleaning response: {e}")
                return self.state

            self._enter(PipelineState.COMPLETE, "Complete!", on_progress)
            return self.state
        finally:
            # An interrupted run (e.g. a UI rerun raised from on_progress) must not stay busy
            if self.busy:
                self._fail("The run was interrupted")
