"""Services layer for Gemini Scribe application logic."""

from .transcription_service import TranscriptionService
from .session_controller import SessionController, reduce_session, SESSION_TOPIC

__all__ = [
    "TranscriptionService",
    "SessionController",
    "reduce_session",
    "SESSION_TOPIC",
]
