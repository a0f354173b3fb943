"""Abstract base classes and errors for transcription backends."""

from abc import ABC, abstractmethod
import logging

from ..models.session import MediaFile
from ..models.transcription import TranscriptionResult

logger = logging.getLogger(__name__)


class TranscriptionError(RuntimeError):
    """Base class for failures of a transcription attempt."""


class MissingAPIKeyError(TranscriptionError):
    """No credential configured; raised before any network work."""


class NoTranscriptionError(TranscriptionError):
    """The model answered but returned no text."""


class GeminiAPIError(TranscriptionError):
    """The API answered with a non-success status."""

    def __init__(self, status: int, body: str):
        super().__init__(f"Gemini API error: {status} - {body}")
        self.status = status
        self.body = body


class AbstractTranscriptionBackend(ABC):
    """Abstract base class for transcription backends."""

    @abstractmethod
    async def transcribe(self, media: MediaFile) -> TranscriptionResult:
        """Transcribe a whole media file in one request.

        Args:
            media: A validated audio or video file

        Returns:
            TranscriptionResult with the text and metadata

        Raises:
            TranscriptionError: If no transcript could be produced
        """
        pass
