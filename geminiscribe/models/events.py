"""Events that drive the session state machine."""

from dataclasses import dataclass

from .session import MediaFile


class SessionEvent:
    """Base class for everything the session reducer understands."""


@dataclass(frozen=True)
class FileAccepted(SessionEvent):
    file: MediaFile


@dataclass(frozen=True)
class TranscriptionStarted(SessionEvent):
    attempt_id: int


@dataclass(frozen=True)
class TranscriptionSucceeded(SessionEvent):
    attempt_id: int
    text: str


@dataclass(frozen=True)
class TranscriptionFailed(SessionEvent):
    attempt_id: int
    message: str


@dataclass(frozen=True)
class SessionReset(SessionEvent):
    pass
