"""Transcription service that owns the configured backend."""

import logging
from typing import Optional

from ..transcription import AbstractTranscriptionBackend, GeminiTranscriptionBackend
from ..models.session import MediaFile
from ..config import GeminiScribeConfig

logger = logging.getLogger(__name__)


class TranscriptionService:
    """Service that turns a media file into transcript text."""

    def __init__(self, config: GeminiScribeConfig,
                 backend: Optional[AbstractTranscriptionBackend] = None):
        """Initialize transcription service.

        Args:
            config: Application configuration
            backend: Backend to use; built from config when omitted
        """
        self.config = config
        self.backend = backend or self._create_gemini_backend()

    async def transcribe(self, media: MediaFile) -> str:
        """Run one transcription attempt and return the text verbatim.

        Every call is a brand-new request; nothing is cached by file content.
        """
        logger.info(f"Transcribing {media.name} ({media.mime_type})")
        result = await self.backend.transcribe(media)
        logger.info(f"Transcription of {result.file_name} finished in {result.processing_time:.1f}s")
        return result.text

    def _create_gemini_backend(self) -> GeminiTranscriptionBackend:
        """Create the Gemini backend from configuration.

        The API key is not read here; the backend resolves it on every call.
        """
        model = self.config.get('gemini.model', 'gemini-flash-latest')
        api_key_env = self.config.get('gemini.api_key_env', 'GEMINI_API_KEY')
        base_url = self.config.get('gemini.base_url', 'https://generativelanguage.googleapis.com/v1beta')
        timeout_seconds = self.config.get('gemini.timeout_seconds')

        logger.info("Initializing Gemini backend...")
        logger.debug(f"Config: model={model}, api_key_env={api_key_env}, timeout={timeout_seconds}")

        return GeminiTranscriptionBackend(
            model=model,
            api_key_env=api_key_env,
            base_url=base_url,
            timeout_seconds=timeout_seconds
        )
