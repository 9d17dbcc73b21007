"""
Centralized error handling for the application.

Every failure the API reports is a ``TranscriptAppError`` subclass carrying the
HTTP status it maps to. The handlers registered here turn them into the
``{"error": ...}`` payload both endpoints share.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.utils.logger import logging


class TranscriptAppError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidLocatorError(TranscriptAppError):
    """The URL or video id could not be parsed."""

    status_code = 400


class MissingArgumentError(TranscriptAppError):
    status_code = 400


class MissingCredentialError(TranscriptAppError):
    status_code = 500


class MalformedCredentialError(TranscriptAppError):
    status_code = 500


class MissingDependencyError(TranscriptAppError):
    """A required external utility is not installed."""

    status_code = 500


class RemoteAuthFailureError(TranscriptAppError):
    """The remote service rejected our credential."""

    status_code = 401


class RateLimitedError(TranscriptAppError):
    status_code = 429


class TranscriptionFailedError(TranscriptAppError):
    status_code = 500


class TranscriptionTooShortError(TranscriptAppError):
    status_code = 500


class GenerationFailedError(TranscriptAppError):
    status_code = 500


class StrategyUnavailable(Exception):
    """A transcript strategy found nothing usable; the next one should be tried."""


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that turn exceptions into ``{"error": ...}`` payloads."""

    @app.exception_handler(TranscriptAppError)
    async def transcript_app_error_handler(request: Request, exc: TranscriptAppError):
        logging.error(f"{request.url.path} failed with {exc.status_code}: {exc.message}")
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logging.warning(f"Rejected malformed request to {request.url.path}: {exc.errors()}")
        return error_response(400, "Malformed request body")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler for unhandled exceptions."""
        logging.exception(f"Unhandled error on {request.url.path}")
        return error_response(500, f"An unexpected error occurred: {str(exc)}")
