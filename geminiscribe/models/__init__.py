"""Data models for the Gemini Scribe application."""

from .session import AppStatus, MediaFile, Session
from .events import (
    SessionEvent,
    FileAccepted,
    TranscriptionStarted,
    TranscriptionSucceeded,
    TranscriptionFailed,
    SessionReset,
)
from .transcription import TranscriptionRequest, TranscriptionResult

__all__ = [
    "AppStatus",
    "MediaFile",
    "Session",
    # Session events
    "SessionEvent",
    "FileAccepted",
    "TranscriptionStarted",
    "TranscriptionSucceeded",
    "TranscriptionFailed",
    "SessionReset",
    # Transcription
    "TranscriptionRequest",
    "TranscriptionResult",
]
