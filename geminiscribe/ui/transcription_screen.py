"""Terminal screen for the select -> transcribe -> review flow."""

import asyncio
import logging
from typing import List, Optional, Tuple

import click
from pubsub import pub
from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text
from rich.table import Table
from rich.align import Align

from ..config import GeminiScribeConfig
from ..media import DropZone, format_bytes
from ..models.session import AppStatus, Session
from ..services import SessionController, TranscriptionService
from ..storage.download_manager import DownloadManager
from .transcript_view import TranscriptViewer


logger = logging.getLogger(__name__)

TRANSCRIBING_MESSAGE = "Transcribing... This might take a moment depending on the file size."


class TranscriptionScreen:
    """Terminal transcription interface using line input and rich output."""

    def __init__(self,
                 config: GeminiScribeConfig,
                 controller: Optional[SessionController] = None,
                 downloads: Optional[DownloadManager] = None,
                 console: Optional[Console] = None):
        """Initialize transcription screen.

        Args:
            config: Application configuration
            controller: Session controller; built from config when omitted
            downloads: Download manager; built from config when omitted
            console: Rich console to draw on
        """
        self.console = console or Console()
        self.config = config
        self.controller = controller or SessionController(TranscriptionService(config))
        self.downloads = downloads or DownloadManager(config.get_output_directory())
        self.drop_zone = DropZone(
            on_file_accepted=self.controller.accept_file,
            on_file_rejected=self.show_alert,
            max_bytes=config.get_max_upload_bytes()
        )
        self.viewer: Optional[TranscriptViewer] = None
        self.notices: List[Tuple[str, str]] = []
        self.running = False

        pub.subscribe(self.on_session_changed, self.controller.topic)
        logger.info("TranscriptionScreen initialized")

    @property
    def session(self) -> Session:
        return self.controller.session

    def on_session_changed(self, session: Session) -> None:
        """Keep the drop zone and the viewer in step with the session."""
        self.drop_zone.disabled = session.status is not AppStatus.IDLE
        if session.status is AppStatus.COMPLETED:
            file_name = session.file.name if session.file else "transcript"
            self.viewer = TranscriptViewer(
                session.transcript, file_name, self.downloads,
                pdf_font_path=self.config.get('export.pdf_font_path')
            )
        else:
            self.viewer = None

    def show_alert(self, message: str) -> None:
        self.notices.append((f"⚠️  {message}", "bold yellow"))

    def notify(self, message: str, style: str = "green") -> None:
        self.notices.append((message, style))

    # Rendering

    def render_header(self) -> Panel:
        header_text = Text.assemble(
            ("🎙️  Gemini Scribe", "bold blue"),
            "  |  ",
            ("Powered by Google Gemini", "dim"),
            "  |  ",
            (self.session.status.value, "bold")
        )
        return Panel(Align.center(header_text), style="bright_blue")

    def render_body(self):
        status = self.session.status
        if status is AppStatus.IDLE:
            return self.render_drop_zone()
        if status in (AppStatus.FILE_SELECTED, AppStatus.ERROR):
            return self.render_file_card()
        if status is AppStatus.TRANSCRIBING:
            return Panel(Text(TRANSCRIBING_MESSAGE, style="yellow italic"), border_style="blue")
        return self.render_transcript()

    def render_drop_zone(self) -> Group:
        intro = Text.assemble(
            ("Turn Audio into Text, Instantly.\n", "bold"),
            ("Upload your MP3s, MP4s, or WAV files. Our AI-powered engine transcribes them "
             "with high accuracy in seconds.", "white")
        )
        zone = Text.assemble(
            ("Drop a media file onto this window or type its path\n", "bold"),
            ("Support for MP3, MP4, WAV, M4A, and most common audio/video formats.\n", "dim"),
            (f"(Max {self.drop_zone.max_bytes / (1024 * 1024):g}MB for this demo)", "dim")
        )
        return Group(Align.center(intro), Panel(Align.center(zone), border_style="blue", padding=(1, 2)))

    def render_file_card(self) -> Panel:
        media = self.session.file
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Kind", "🎬 Video" if media.is_video else "🎵 Audio")
        table.add_row("File", media.name)
        table.add_row("Details", f"{format_bytes(media.size)} • {media.mime_type}")

        parts = [table]
        if self.session.status is AppStatus.ERROR:
            parts.append(Text.assemble(
                "\n",
                ("Transcription failed. ", "bold red"),
                (self.session.error or "", "red")
            ))
        return Panel(Group(*parts), title="Selected file", border_style="green")

    def render_transcript(self) -> Panel:
        viewer = self.viewer
        if viewer is None:
            return Panel(Text("Transcription will appear here...", style="dim italic"))

        subtitle = f"{viewer.character_count} characters"
        if viewer.copied:
            subtitle += "  ✓ Copied"
        return Panel(
            Text(viewer.text or "Transcription will appear here...", style="white"),
            title="📝 Transcription Result",
            subtitle=subtitle,
            border_style="blue"
        )

    def render_commands(self) -> Text:
        status = self.session.status
        if status is AppStatus.IDLE:
            commands = [("q", "Quit")]
        elif status in (AppStatus.FILE_SELECTED, AppStatus.ERROR):
            start_label = "Retry Transcription" if status is AppStatus.ERROR else "Start Transcription"
            commands = [("1", start_label), ("2", "Remove file"), ("q", "Quit")]
        elif status is AppStatus.COMPLETED:
            commands = [("1", "Copy"), ("2", "TXT"), ("3", "PDF"), ("4", "Word"),
                        ("5", "Edit"), ("6", "Transcribe another file"), ("q", "Quit")]
        else:
            commands = []

        text = Text("Commands: ", style="bold")
        for key, label in commands:
            text.append(key, style="bold green")
            text.append(f" {label}  ")
        return text

    def show_status(self) -> None:
        """Redraw the whole screen, then any pending notices."""
        self.console.clear()
        self.console.print(self.render_header())
        self.console.print(self.render_body())
        self.console.print(self.render_commands())
        for message, style in self.notices:
            self.console.print(message, style=style)
        self.notices.clear()

    # Actions

    def start_transcription(self) -> None:
        with self.console.status(TRANSCRIBING_MESSAGE):
            asyncio.run(self.controller.start_transcription())

    def reset_session(self) -> None:
        self.controller.reset()
        self.notify("🔄 Session reset", "bold blue")

    def export(self, fmt: str) -> None:
        try:
            path = self.viewer.download(fmt)
            self.notify(f"✅ Saved {path}")
        except Exception as e:
            logger.error(f"Error exporting {fmt}: {e}")
            self.notices.append((f"❌ Export failed: {e}", "bold red"))

    def copy_transcript(self) -> None:
        try:
            self.viewer.copy()
        except Exception as e:
            logger.error(f"Error copying transcript: {e}")
            self.notices.append((f"❌ Copy failed: {e}", "bold red"))

    def edit_transcript(self) -> None:
        try:
            if self.viewer.edit():
                self.notify("✏️  Transcript updated")
        except click.ClickException as e:
            logger.error(f"Error editing transcript: {e}")
            self.notices.append((f"❌ Could not open editor: {e.format_message()}", "bold red"))

    def handle_input(self, line: str) -> bool:
        """Handle one line of input. Returns True to continue, False to quit."""
        command = line.strip()
        logger.debug(f"Handling input: '{command}' in {self.session.status.value}")
        if command.lower() == 'q':
            return False

        status = self.session.status
        if status is AppStatus.IDLE:
            if command:
                self.drop_zone.handle_drop(command)
        elif status in (AppStatus.FILE_SELECTED, AppStatus.ERROR):
            if command == '1':
                self.start_transcription()
            elif command == '2':
                self.reset_session()
            elif command:
                self.show_alert(f"Unknown command: {command}")
        elif status is AppStatus.COMPLETED:
            actions = {
                '1': self.copy_transcript,
                '2': lambda: self.export("txt"),
                '3': lambda: self.export("pdf"),
                '4': lambda: self.export("doc"),
                '5': self.edit_transcript,
                '6': self.reset_session,
            }
            if command in actions:
                actions[command]()
            elif command:
                self.show_alert(f"Unknown command: {command}")
        return True

    def run(self) -> None:
        """Run the transcription screen until the user quits."""
        self.running = True
        try:
            while self.running:
                self.show_status()
                try:
                    line = self.console.input("[bold]> [/bold]")
                except EOFError:
                    break
                self.running = self.handle_input(line)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received")
        finally:
            self.cleanup()

    def cleanup(self) -> None:
        """Clean up resources."""
        self.running = False
        if pub.isSubscribed(self.on_session_changed, self.controller.topic):
            pub.unsubscribe(self.on_session_changed, self.controller.topic)
        self.console.print("👋 Gemini Scribe session ended", style="bold blue")
        logger.info("TranscriptionScreen cleanup completed")
