"""Transcription module for Gemini Scribe."""

from .base import (
    AbstractTranscriptionBackend,
    TranscriptionError,
    MissingAPIKeyError,
    NoTranscriptionError,
    GeminiAPIError,
)
from ..models.transcription import TranscriptionRequest, TranscriptionResult
from .gemini_backend import GeminiTranscriptionBackend, TRANSCRIPTION_PROMPT

__all__ = [
    "AbstractTranscriptionBackend",
    "TranscriptionError",
    "MissingAPIKeyError",
    "NoTranscriptionError",
    "GeminiAPIError",
    "TranscriptionRequest",
    "TranscriptionResult",
    "GeminiTranscriptionBackend",
    "TRANSCRIPTION_PROMPT",
]
