"""
Reusable UI components for the Streamlit app.
"""

import re
import streamlit as st
from typing import Optional


def header():
    """Display the application header."""
    st.set_page_config(
        page_title="YouTube Transcript Cleaner",
        page_icon="📝",
        layout="wide",
    )

    st.title("📝 Transcript")
    st.markdown("""
    Transform YouTube videos into clean, readable articles with AI-powered transcription.
    """)
    st.divider()


def sidebar(default_api_url: str) -> str:
    """
    Display the sidebar with app information and settings.

    Returns:
        The API URL entered by the user
    """
    with st.sidebar:
        st.markdown("## About")
        st.info("""
        Paste a YouTube link to get an article-ready transcript:
        - Uses the video's own captions when available
        - Falls back to Whisper transcription of the audio
        - Cleans the text into readable paragraphs with Claude
        """)

        st.markdown("## Settings")
        return st.text_input("API URL", value=default_api_url, key="api_url")


def youtube_input(disabled: bool = False) -> Optional[str]:
    """
    Display the YouTube URL form.

    Args:
        disabled: Disable the form while a run is in flight

    Returns:
        The submitted URL (possibly empty) or None if the form was not submitted
    """
    with st.form(key="youtube_form"):
        url = st.text_input(
            "YouTube URL",
            placeholder="https://www.youtube.com/watch?v=...",
            disabled=disabled,
        )
        submit = st.form_submit_button("Extract Transcript", disabled=disabled)

    if submit:
        return url
    return None


def display_error(message: str):
    st.error(message)


def whisper_badge(used_whisper: bool):
    if used_whisper:
        st.caption("🎙️ Transcribed from audio with Whisper")
    else:
        st.caption("📝 From the video's captions")


def _file_name(title: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title).strip("_")
    return f"{slug or 'transcript'}.md"


def display_article(title: str, article: str, used_whisper: bool):
    """
    Display the cleaned article with a download button.

    Args:
        title: Video title
        article: Cleaned transcript text
        used_whisper: Whether the transcript came from audio transcription
    """
    st.markdown(f"## {title}")
    whisper_badge(used_whisper)
    st.markdown(article)
    st.download_button(
        "Download article",
        data=article,
        file_name=_file_name(title),
        mime="text/markdown",
    )


def display_raw_transcript(text: str):
    """Show the untouched transcript, collapsed by default."""
    with st.expander("Show raw transcript"):
        st.text(text)
        st.caption(f"{len(text)} characters")
