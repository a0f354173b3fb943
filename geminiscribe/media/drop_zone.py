"""File intake for the terminal: dropped paths and explicit selections."""

import os
import shlex
import logging
import mimetypes
from pathlib import Path
from typing import Callable, List, Optional, Union
from urllib.parse import unquote, urlparse

from ..models.session import MediaFile

logger = logging.getLogger(__name__)

DEFAULT_MAX_BYTES = 20 * 1024 * 1024

ACCEPTED_PREFIXES = ("audio/", "video/")

# Platform mime tables disagree on these; pin them.
for _mime_type, _ext in (
    ("audio/wav", ".wav"),
    ("audio/mp4", ".m4a"),
    ("audio/aac", ".aac"),
    ("audio/flac", ".flac"),
    ("audio/ogg", ".ogg"),
    ("audio/ogg", ".opus"),
    ("audio/mpeg", ".mp3"),
    ("video/mp4", ".mp4"),
    ("video/webm", ".webm"),
    ("video/quicktime", ".mov"),
    ("video/x-matroska", ".mkv"),
):
    mimetypes.add_type(_mime_type, _ext)


class FileRejectedError(ValueError):
    """Raised when a candidate file fails type or size validation."""


class DropZone:
    """Accepts a media file from a terminal drop or an explicit selection.

    Dropping a file onto most terminal emulators pastes its (quoted) path,
    so a drop arrives as text. Both sources are validated the same way.
    """

    def __init__(self,
                 on_file_accepted: Callable[[MediaFile], None],
                 on_file_rejected: Optional[Callable[[str], None]] = None,
                 max_bytes: int = DEFAULT_MAX_BYTES,
                 disabled: bool = False):
        """Initialize drop zone.

        Args:
            on_file_accepted: Called with the MediaFile once it passes validation
            on_file_rejected: Called with a user-facing message on rejection
            max_bytes: Upper size limit, inclusive
            disabled: Ignore all input while True
        """
        self.on_file_accepted = on_file_accepted
        self.on_file_rejected = on_file_rejected
        self.max_bytes = max_bytes
        self.disabled = disabled

    def handle_drop(self, dropped_text: str) -> Optional[MediaFile]:
        """Handle text pasted by a drag-and-drop; only the first file is used."""
        if self.disabled:
            return None

        paths = parse_dropped_paths(dropped_text)
        if not paths:
            self._reject("No file was dropped.")
            return None
        if len(paths) > 1:
            logger.info(f"{len(paths)} files dropped, using the first: {paths[0]}")
        return self.validate_and_accept(paths[0])

    def handle_selection(self, path: Union[str, Path]) -> Optional[MediaFile]:
        """Handle a file chosen explicitly (command line or prompt)."""
        if self.disabled:
            return None
        return self.validate_and_accept(Path(path).expanduser())

    def validate_and_accept(self, path: Union[str, Path]) -> Optional[MediaFile]:
        """Validate the candidate and hand it on, or report why it was rejected."""
        try:
            media = self.validate(path)
        except FileRejectedError as e:
            self._reject(str(e))
            return None

        logger.info(f"Accepted file: {media.name} ({media.size} bytes, {media.mime_type})")
        self.on_file_accepted(media)
        return media

    def validate(self, path: Union[str, Path]) -> MediaFile:
        """Build a MediaFile for ``path`` or raise FileRejectedError."""
        path = Path(path)
        if not path.is_file():
            raise FileRejectedError(f"File not found: {path}")

        mime_type, _ = mimetypes.guess_type(path.name)
        mime_type = mime_type or ""
        if not mime_type.startswith(ACCEPTED_PREFIXES):
            raise FileRejectedError("Please upload a valid audio or video file.")

        size = path.stat().st_size
        if size > self.max_bytes:
            limit_mb = self.max_bytes / (1024 * 1024)
            raise FileRejectedError(f"File is too large for this demo (limit {limit_mb:g}MB).")

        return MediaFile(path=path, name=path.name, size=size, mime_type=mime_type)

    def _reject(self, message: str) -> None:
        logger.warning(f"File rejected: {message}")
        if self.on_file_rejected:
            self.on_file_rejected(message)


def parse_dropped_paths(dropped_text: str) -> List[Path]:
    """Split terminal-pasted text into paths.

    Handles shell quoting, backslash-escaped spaces and ``file://`` URIs.
    """
    text = dropped_text.strip()
    if not text:
        return []

    try:
        tokens = shlex.split(text, posix=os.name != "nt")
    except ValueError:
        # Unbalanced quotes: take the text as one path
        tokens = [text]

    paths = []
    for token in tokens:
        token = token.strip("'\"")
        if token.startswith("file://"):
            token = unquote(urlparse(token).path)
        if token:
            paths.append(Path(token).expanduser())
    return paths
