"""Integration tests for the complete select -> transcribe -> export workflow."""

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from geminiscribe.auto_mode import run_auto_mode
from geminiscribe.models.session import AppStatus, Session
from geminiscribe.services.session_controller import SessionController
from geminiscribe.services.transcription_service import TranscriptionService
from geminiscribe.transcription.base import AbstractTranscriptionBackend, NoTranscriptionError
from geminiscribe.models.transcription import TranscriptionResult
from geminiscribe.ui.transcription_screen import TranscriptionScreen


class MockTranscriptionBackend(AbstractTranscriptionBackend):
    """A backend that answers from memory."""

    def __init__(self, text: str = "Speaker 1: Hello world."):
        self.text = text
        self.calls = 0

    async def transcribe(self, media):
        self.calls += 1
        if not self.text:
            raise NoTranscriptionError("No transcription generated.")
        return TranscriptionResult(text=self.text, model="mock", processing_time=0.01, file_name=media.name)


@pytest.fixture
def backend():
    return MockTranscriptionBackend()


@pytest.fixture
def workflow_controller(default_config, backend):
    return SessionController(TranscriptionService(default_config, backend=backend))


@pytest.fixture
def screen(default_config, workflow_controller, downloads):
    console = Console(file=io.StringIO(), width=100)
    screen = TranscriptionScreen(default_config, controller=workflow_controller,
                                 downloads=downloads, console=console)
    yield screen
    screen.cleanup()


@pytest.mark.integration
class TestAutoMode:

    def test_transcribes_and_exports(self, default_config, workflow_controller, downloads, make_media_file):
        path = make_media_file("interview.mp3")

        paths = run_auto_mode(default_config, str(path), export_formats=["txt", "pdf", "doc"],
                              controller=workflow_controller, downloads=downloads)

        assert [p.name for p in paths] == ["interview_transcript.txt",
                                           "interview_transcript.pdf",
                                           "interview_transcript.doc"]
        assert paths[0].read_text(encoding="utf-8") == "Speaker 1: Hello world."
        assert workflow_controller.session.status is AppStatus.COMPLETED

    def test_rejected_file_raises(self, default_config, workflow_controller, downloads, make_media_file):
        path = make_media_file("notes.txt")

        with pytest.raises(RuntimeError, match="valid audio or video"):
            run_auto_mode(default_config, str(path), controller=workflow_controller, downloads=downloads)

        assert workflow_controller.session == Session()

    def test_failed_transcription_raises(self, default_config, workflow_controller, backend,
                                         downloads, make_media_file):
        backend.text = ""

        with pytest.raises(RuntimeError, match="No transcription generated"):
            run_auto_mode(default_config, str(make_media_file("speech.mp3")),
                          controller=workflow_controller, downloads=downloads)

        assert workflow_controller.session.status is AppStatus.ERROR
        assert not downloads.download_dir.exists()

    def test_copy_to_clipboard(self, default_config, workflow_controller, downloads, make_media_file):
        with patch("geminiscribe.ui.transcript_view.pyperclip.copy") as copy:
            run_auto_mode(default_config, str(make_media_file("speech.mp3")), export_formats=[],
                          copy=True, controller=workflow_controller, downloads=downloads)

        copy.assert_called_once_with("Speaker 1: Hello world.")


@pytest.mark.integration
class TestTranscriptionScreen:

    def test_full_flow(self, screen, backend, make_media_file):
        path = make_media_file("my talk.mp4")

        # Terminal drop pastes a quoted path
        assert screen.handle_input(f"'{path}'")
        assert screen.session.status is AppStatus.FILE_SELECTED
        assert screen.drop_zone.disabled

        screen.handle_input("1")
        assert screen.session.status is AppStatus.COMPLETED
        assert screen.viewer.text == "Speaker 1: Hello world."

        screen.handle_input("2")
        exported = screen.downloads.download_dir / "my talk_transcript.txt"
        assert exported.read_text(encoding="utf-8") == "Speaker 1: Hello world."

        screen.handle_input("6")
        assert screen.session == Session()
        assert screen.viewer is None
        assert not screen.drop_zone.disabled

    def test_rejected_drop_shows_alert(self, screen, make_media_file):
        screen.handle_input(str(make_media_file("notes.txt")))

        assert screen.session.status is AppStatus.IDLE
        assert any("valid audio or video" in message for message, _ in screen.notices)

    def test_error_then_retry(self, screen, backend, make_media_file):
        backend.text = ""
        screen.handle_input(str(make_media_file("speech.mp3")))
        screen.handle_input("1")

        assert screen.session.status is AppStatus.ERROR
        screen.show_status()
        output = screen.console.file.getvalue()
        assert "Transcription failed." in output
        assert "Retry Transcription" in output

        backend.text = "Second try."
        screen.handle_input("1")
        assert screen.session.status is AppStatus.COMPLETED
        assert backend.calls == 2

    def test_new_transcription_discards_edits(self, screen, make_media_file):
        screen.handle_input(str(make_media_file("speech.mp3")))
        screen.handle_input("1")
        screen.viewer.set_text("edited")

        screen.handle_input("6")
        screen.handle_input(str(make_media_file("speech.mp3")))
        screen.handle_input("1")

        assert screen.viewer.text == "Speaker 1: Hello world."

    def test_quit(self, screen):
        assert screen.handle_input("q") is False

    def test_renders_completed_view(self, screen, make_media_file):
        screen.handle_input(str(make_media_file("speech.mp3")))
        screen.handle_input("1")

        screen.show_status()
        output = screen.console.file.getvalue()

        assert "Transcription Result" in output
        assert "23 characters" in output
