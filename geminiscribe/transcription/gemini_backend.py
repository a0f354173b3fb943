"""Google Gemini transcription backend."""

import os
import time
import logging
from typing import Any, Dict, Optional

import aiohttp

from .base import (
    AbstractTranscriptionBackend,
    GeminiAPIError,
    MissingAPIKeyError,
    NoTranscriptionError,
)
from ..media.encoder import encode_file
from ..models.session import MediaFile
from ..models.transcription import TranscriptionRequest, TranscriptionResult

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-flash-latest"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
FALLBACK_API_KEY_ENV = "API_KEY"

TRANSCRIPTION_PROMPT = """Please provide a highly accurate, verbatim transcription of this audio/video file.

Rules:
1. Identify speakers if possible (e.g., Speaker 1:, Speaker 2:).
2. Ignore filler words like "um", "uh" unless they add meaning.
3. Use proper punctuation and paragraph breaks.
4. If the audio is in a language other than English, transcribe it in the original language and then provide an English translation below it.
5. Return ONLY the transcription text, do not add any conversational preamble like "Here is the transcription:"."""


class GeminiTranscriptionBackend(AbstractTranscriptionBackend):
    """Sends a whole media file inline to Gemini's generateContent endpoint."""

    def __init__(self,
                 model: str = DEFAULT_MODEL,
                 api_key_env: str = "GEMINI_API_KEY",
                 base_url: str = DEFAULT_BASE_URL,
                 timeout_seconds: Optional[float] = None):
        """Initialize Gemini backend.

        Args:
            model: Gemini model name
            api_key_env: Environment variable holding the API key, read on every call
            base_url: API root, without trailing slash
            timeout_seconds: Total request timeout; None waits indefinitely
        """
        self.model = model
        self.api_key_env = api_key_env
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.service_name = "Google Gemini"

        logger.info(f"GeminiTranscriptionBackend initialized with model: {model}")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def resolve_api_key(self) -> str:
        """Read the API key from the environment - RAISES if not set."""
        api_key = os.environ.get(self.api_key_env) or os.environ.get(FALLBACK_API_KEY_ENV)
        if not api_key:
            raise MissingAPIKeyError("API Key not found in environment variables")
        return api_key

    def build_request(self, media: MediaFile) -> TranscriptionRequest:
        """Encode the file and pair it with the fixed instructions."""
        return TranscriptionRequest(
            data=encode_file(media),
            mime_type=media.mime_type,
            prompt=TRANSCRIPTION_PROMPT,
            model=self.model,
        )

    async def transcribe(self, media: MediaFile) -> TranscriptionResult:
        """Transcribe a media file with a single generateContent call.

        Raises:
            MissingAPIKeyError: No key configured (checked before any I/O)
            GeminiAPIError: The API answered with a non-200 status
            NoTranscriptionError: The answer carried no text
            aiohttp.ClientError: Transport failures, unchanged
        """
        api_key = self.resolve_api_key()
        request = self.build_request(media)
        start_time = time.time()

        headers = {
            "x-goog-api-key": api_key,
            "Content-Type": "application/json"
        }

        logger.debug(f"Sending {media.name} ({media.mime_type}, {media.size} bytes) to {self.model}")

        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(self.endpoint, headers=headers, json=request.to_payload()) as response:
                    if response.status != 200:
                        error_text = await response.text()
                        raise GeminiAPIError(response.status, error_text)

                    result = await response.json()
            text = extract_text(result)
        except Exception as e:
            logger.error(f"Transcription error for {media.name}: {e}")
            raise

        if not text:
            raise NoTranscriptionError("No transcription generated.")

        processing_time = time.time() - start_time
        logger.info(f"✅ TRANSCRIPTION SUCCESS: {media.name} -> {len(text)} chars in {processing_time:.1f}s")

        return TranscriptionResult(
            text=text,
            model=self.model,
            processing_time=processing_time,
            file_name=media.name,
        )


def extract_text(response: Dict[str, Any]) -> str:
    """Concatenate the text parts of the first candidate; '' when there are none."""
    candidates = response.get("candidates") or []
    if not candidates:
        return ""

    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))
