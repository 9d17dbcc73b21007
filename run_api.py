"""
Start the transcript cleaner API with uvicorn.
"""

import os
import shutil
import argparse

import uvicorn
from dotenv import load_dotenv

from app.config import config, load_settings


def preflight() -> list:
    """Return human-readable notes about services that will not work."""
    settings = load_settings()
    notes = []
    if not settings.anthropic_api_key:
        notes.append("ANTHROPIC_API_KEY is not set: /api/v1/clean will fail")
    if not settings.groq_api_key:
        notes.append("GROQ_API_KEY is not set: videos without captions will fail")
    if shutil.which(settings.ytdlp_binary) is None:
        notes.append(f"'{settings.ytdlp_binary}' was not found on PATH: audio fallback is disabled")
    return notes


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description=f"{config.APP_NAME} API")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"), help="Interface to listen on")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")), help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--log-level", default=config.LOG_LEVEL.lower(),
                        choices=["debug", "info", "warning", "error"])
    args = parser.parse_args()

    print(f"{config.APP_NAME} v{config.APP_VERSION} on http://{args.host}:{args.port}")
    for note in preflight():
        print(f"  warning: {note}")

    uvicorn.run(
        "app.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
