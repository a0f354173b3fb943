"""Session-related data models."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class AppStatus(Enum):
    """Stages of the single-file transcription flow."""
    IDLE = "IDLE"
    FILE_SELECTED = "FILE_SELECTED"
    TRANSCRIBING = "TRANSCRIBING"
    COMPLETED = "COMPLETED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class MediaFile:
    """An audio or video file chosen by the user."""
    path: Path
    name: str
    size: int  # Bytes
    mime_type: str

    @property
    def is_video(self) -> bool:
        return self.mime_type.startswith("video/")

    def read_bytes(self) -> bytes:
        return Path(self.path).read_bytes()


@dataclass(frozen=True)
class Session:
    """The single in-memory unit of work. ``Session()`` is the reset value."""
    status: AppStatus = AppStatus.IDLE
    file: Optional[MediaFile] = None
    transcript: str = ""
    error: Optional[str] = None
    attempt_id: Optional[int] = None  # Active transcription attempt, if any
