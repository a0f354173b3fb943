"""Editable transcript with copy and export actions."""

import time
import logging
from pathlib import Path
from typing import Optional

import click
import pyperclip

from ..export import export_filename, render_txt, render_pdf, doc_data_uri
from ..storage.download_manager import DownloadManager

logger = logging.getLogger(__name__)

COPY_CONFIRMATION_SECONDS = 2.0


class TranscriptViewer:
    """Holds the user's working copy of a transcript.

    Edits live only here; the session keeps the text as transcribed, and a
    new transcription replaces the viewer (and any edits) entirely.
    """

    def __init__(self, text: str, file_name: str, downloads: DownloadManager,
                 pdf_font_path: Optional[str] = None):
        """Initialize viewer.

        Args:
            text: Transcript to seed the editor with
            file_name: Name of the transcribed media file
            downloads: Where exported files are written
            pdf_font_path: Optional TTF font for PDF export
        """
        self.text = text
        self.file_name = file_name or "transcript"
        self.downloads = downloads
        self.pdf_font_path = pdf_font_path
        self._copied_until = 0.0

    @property
    def character_count(self) -> int:
        return len(self.text)

    @property
    def copied(self) -> bool:
        """True for a short while after a copy, to show a confirmation."""
        return time.monotonic() < self._copied_until

    def set_text(self, text: str) -> None:
        self.text = text

    def edit(self) -> bool:
        """Open the text in the user's editor. Returns True if it changed."""
        edited = click.edit(self.text, extension=".txt", require_save=True)
        if edited is None:
            return False
        # Editors append a trailing newline on save
        edited = edited[:-1] if edited.endswith("\n") and not self.text.endswith("\n") else edited
        changed = edited != self.text
        self.text = edited
        logger.info(f"Transcript edited ({self.character_count} characters)")
        return changed

    def copy(self) -> None:
        pyperclip.copy(self.text)
        self._copied_until = time.monotonic() + COPY_CONFIRMATION_SECONDS
        logger.info(f"Copied {self.character_count} characters to clipboard")

    def download_txt(self) -> Path:
        return self.downloads.save_bytes(render_txt(self.text), export_filename(self.file_name, "txt"))

    def download_pdf(self) -> Path:
        data = render_pdf(self.text, self.file_name, font_path=self.pdf_font_path)
        return self.downloads.save_bytes(data, export_filename(self.file_name, "pdf"))

    def download_doc(self) -> Path:
        return self.downloads.save_data_uri(doc_data_uri(self.text), export_filename(self.file_name, "doc"))

    def download(self, fmt: str) -> Path:
        """Export in one of ``txt``, ``pdf`` or ``doc``."""
        exporters = {
            "txt": self.download_txt,
            "pdf": self.download_pdf,
            "doc": self.download_doc,
        }
        if fmt not in exporters:
            raise ValueError(f"Unknown export format: {fmt}")
        return exporters[fmt]()
