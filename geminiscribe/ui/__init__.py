"""Terminal user interface for Gemini Scribe."""

from .transcript_view import TranscriptViewer
from .transcription_screen import TranscriptionScreen

__all__ = ["TranscriptViewer", "TranscriptionScreen"]
