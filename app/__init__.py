"""
YouTube Transcript Cleaner Application.

This application fetches the transcript of a YouTube video, from its captions
or by transcribing the audio, and cleans it into article prose with an LLM.
"""

from app.config import config

__version__ = config.APP_VERSION
