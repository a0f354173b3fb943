"""Pytest configuration and fixtures for Gemini Scribe tests."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import pytest
from pubsub import pub

from geminiscribe.config import GeminiScribeConfig
from geminiscribe.models.session import MediaFile
from geminiscribe.services.session_controller import SessionController
from geminiscribe.storage.download_manager import DownloadManager


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class FakeTranscriptionService:
    """Stands in for TranscriptionService; optionally waits on a gate before answering."""

    def __init__(self, text: str = "Hello world", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.gate: Optional[asyncio.Event] = None
        self.calls = []

    async def transcribe(self, media: MediaFile) -> str:
        self.calls.append(media)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture(autouse=True)
def clean_pubsub():
    """Drop listeners between tests."""
    yield
    pub.unsubAll()


@pytest.fixture
def temp_data_dir(tmp_path):
    """Temporary directory for test data."""
    return tmp_path


@pytest.fixture
def default_config(tmp_path, monkeypatch):
    """Built-in defaults, independent of any geminiscribe.yaml in the working tree."""
    monkeypatch.chdir(tmp_path)
    return GeminiScribeConfig()


@pytest.fixture
def make_media_file(temp_data_dir):
    """Create a file on disk and return its path."""
    def _make(name: str = "speech.mp3", content: bytes = b"ID3fake-mp3-bytes", size: Optional[int] = None) -> Path:
        path = Path(temp_data_dir) / name
        with open(path, "wb") as f:
            f.write(content)
            if size is not None:
                f.truncate(size)
        return path
    return _make


@pytest.fixture
def sample_media(make_media_file):
    path = make_media_file()
    return MediaFile(path=path, name=path.name, size=path.stat().st_size, mime_type="audio/mpeg")


@pytest.fixture
def fake_service():
    return FakeTranscriptionService()


@pytest.fixture
def controller(fake_service):
    return SessionController(fake_service)


@pytest.fixture
def downloads(temp_data_dir):
    return DownloadManager(str(Path(temp_data_dir) / "downloads"))


@pytest.fixture
def session_log():
    """Subscribe to session changes and collect every published session."""
    received = []

    def listener(session):
        received.append(session)

    # The fixture frame keeps the listener alive; pypubsub holds weak references
    pub.subscribe(listener, "session.changed")
    yield received
