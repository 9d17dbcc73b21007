"""
Command line entry point for the YouTube transcript cleaner.

Runs the same fetch-then-clean sequence as the web app, in process.
"""

import sys
import argparse
from pathlib import Path
from typing import Optional, Tuple

from app.config import Settings, load_settings
from app.core.cleaner import TranscriptCleaner
from app.core.prompts import ARTICLE_CLEANUP_TASK
from app.core.resolver import TranscriptResolver
from app.models.schemas import CleanerConfig, TranscriptResult
from app.utils.error_handling import TranscriptAppError
from app.utils.logger import logging


def save_article(title: str, article: str, output_file: str) -> Path:
    """Write the cleaned article to a markdown file."""
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(f"# {title}\n\n{article}\n", encoding="utf-8")
    logging.info(f"Article saved to: {output_path}")
    return output_path


def clean_youtube_video(
    url: str,
    settings: Settings,
    task: str = ARTICLE_CLEANUP_TASK,
    skip_cleaning: bool = False,
) -> Tuple[TranscriptResult, Optional[str]]:
    """
    Fetch a transcript for a YouTube video and clean it into an article.

    Args:
        url: YouTube video URL or ID
        settings: Runtime settings
        task: Cleaning instruction passed to the model
        skip_cleaning: Only fetch the raw transcript

    Returns:
        The transcript and the cleaned article (None when cleaning was skipped)
    """
    resolver = TranscriptResolver.from_settings(settings)
    transcript = resolver.resolve(url)
    logging.info(f"Got {len(transcript.text)} chars of transcript from {transcript.source.value}")

    if skip_cleaning:
        return transcript, None

    cleaner = TranscriptCleaner(
        CleanerConfig(
            model=settings.cleaner_model,
            model_provider=settings.cleaner_provider,
            max_tokens=settings.cleaner_max_tokens,
        ),
        api_key=settings.anthropic_api_key,
        timeout=settings.generation_timeout,
    )
    article = cleaner.clean(transcript.text, task)
    return transcript, article


def main(argv=None) -> int:
    """Main function to run the application from command line."""
    parser = argparse.ArgumentParser(description="YouTube Transcript Cleaner")
    parser.add_argument("url", help="YouTube video URL or ID")
    parser.add_argument("--raw", action="store_true", help="Print the raw transcript without cleaning it")
    parser.add_argument("--model", help="Model used for cleaning")
    parser.add_argument("--output", help="Write the result to this file instead of stdout")

    args = parser.parse_args(argv)

    settings = load_settings()
    if args.model:
        settings = settings.model_copy(update={"cleaner_model": args.model})

    try:
        transcript, article = clean_youtube_video(args.url, settings, skip_cleaning=args.raw)
    except TranscriptAppError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    text = transcript.text if article is None else article
    if args.output:
        save_article(transcript.title, text, args.output)
    else:
        print("\n" + "=" * 80)
        print(transcript.title + (" (Whisper)" if transcript.used_whisper else ""))
        print("=" * 80)
        print(text)
        print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
