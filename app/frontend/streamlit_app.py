"""
Main Streamlit application for the YouTube transcript cleaner.
"""

import os
import streamlit as st
from dotenv import load_dotenv

from app.config import config
from app.frontend.api_client import ApiClient
from app.frontend.components import (
    header, sidebar, youtube_input, display_error,
    display_article, display_raw_transcript, whisper_badge,
)
from app.frontend.orchestrator import PipelineState, TranscriptPipeline


load_dotenv()


def init_session_state(api_url: str):
    """Initialize session state variables."""
    pipeline = st.session_state.get("pipeline")
    if pipeline is None or pipeline.client.base_url != api_url:
        st.session_state.pipeline = TranscriptPipeline(ApiClient(api_url))


def process_youtube_url(url: str):
    """Run the fetch-then-clean sequence, showing each step as it starts."""
    pipeline: TranscriptPipeline = st.session_state.pipeline
    with st.status("Starting...", expanded=False) as status:
        pipeline.run(url, on_progress=lambda label: status.update(label=label))
        if pipeline.state is PipelineState.COMPLETE:
            status.update(label="Complete!", state="complete")
        elif pipeline.state is PipelineState.FAILED:
            status.update(label="Failed", state="error")


def form_locked(state) -> bool:
    """True while a submitted URL is queued or a run is in flight."""
    pipeline = state.get("pipeline")
    return state.get("pending_url") is not None or (pipeline is not None and pipeline.busy)


def run_pending(state) -> bool:
    """Run the queued URL, if any, and clear the queue even if the run is interrupted."""
    url = state.get("pending_url")
    if url is None:
        return False
    try:
        process_youtube_url(url)
    finally:
        state["pending_url"] = None
    return True


def results_view(pipeline: TranscriptPipeline):
    """Show whatever the last run produced."""
    if pipeline.error:
        display_error(pipeline.error)

    if pipeline.cleaned_transcript:
        display_article(pipeline.video_title, pipeline.cleaned_transcript, pipeline.used_whisper)
    elif pipeline.raw_transcript:
        # Cleaning failed; keep the raw transcript visible
        st.markdown(f"## {pipeline.video_title}")
        whisper_badge(pipeline.used_whisper)

    if pipeline.raw_transcript:
        display_raw_transcript(pipeline.raw_transcript)

    if pipeline.state is not PipelineState.IDLE or pipeline.error:
        if st.button("Start over"):
            pipeline.reset()
            st.rerun()


def main():
    """Main application entry point."""
    header()
    api_url = sidebar(os.getenv("API_URL", config.PUBLIC_URL))
    init_session_state(api_url)

    pipeline: TranscriptPipeline = st.session_state.pipeline

    # A submit only queues the URL; the run starts on the next pass with the form disabled
    url = youtube_input(disabled=form_locked(st.session_state))
    if url is not None:
        st.session_state["pending_url"] = url
        st.rerun()

    if run_pending(st.session_state):
        st.rerun()

    results_view(pipeline)


if __name__ == "__main__":
    main()
