"""
Core functionality for the YouTube transcript cleaner application.

This package contains modules for fetching captions, downloading and
transcribing audio, and cleaning transcripts.
"""
