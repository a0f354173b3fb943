"""Session state machine: a pure reducer plus the controller that drives it."""

import itertools
import logging
from dataclasses import replace

from pubsub import pub

from ..models.session import AppStatus, MediaFile, Session
from ..models.events import (
    SessionEvent,
    FileAccepted,
    TranscriptionStarted,
    TranscriptionSucceeded,
    TranscriptionFailed,
    SessionReset,
)
from .transcription_service import TranscriptionService

logger = logging.getLogger(__name__)

SESSION_TOPIC = "session.changed"

DEFAULT_ERROR_MESSAGE = "An error occurred during transcription."
NO_TRANSCRIPTION_MESSAGE = "No transcription generated."

STARTABLE_STATES = (AppStatus.FILE_SELECTED, AppStatus.ERROR)


def reduce_session(session: Session, event: SessionEvent) -> Session:
    """Return the session that results from applying ``event``.

    Events that are not valid in the current state leave the session as is.
    Results are only applied to the attempt that is currently active, so a
    response that arrives after a reset or a newer start is dropped.
    """
    if isinstance(event, SessionReset):
        return Session()

    if isinstance(event, FileAccepted):
        if session.status is not AppStatus.IDLE:
            return session
        return Session(status=AppStatus.FILE_SELECTED, file=event.file)

    if isinstance(event, TranscriptionStarted):
        if session.status not in STARTABLE_STATES or session.file is None:
            return session
        return replace(session, status=AppStatus.TRANSCRIBING, transcript="",
                       error=None, attempt_id=event.attempt_id)

    if isinstance(event, (TranscriptionSucceeded, TranscriptionFailed)):
        if session.status is not AppStatus.TRANSCRIBING or session.attempt_id != event.attempt_id:
            return session
        if isinstance(event, TranscriptionSucceeded):
            return replace(session, status=AppStatus.COMPLETED, transcript=event.text)
        return replace(session, status=AppStatus.ERROR, transcript="", error=event.message)

    raise TypeError(f"Unknown session event: {event!r}")


class SessionController:
    """Owns the current session and runs transcription attempts against it."""

    def __init__(self, transcription_service: TranscriptionService, topic: str = SESSION_TOPIC):
        """Initialize session controller.

        Args:
            transcription_service: Service that performs the remote call
            topic: Pub/sub topic on which session changes are published
        """
        self.transcription_service = transcription_service
        self.topic = topic
        self.session = Session()
        self._attempt_ids = itertools.count(1)
        self._in_flight = None

    @property
    def is_busy(self) -> bool:
        """True while a transcription request is outstanding."""
        return self._in_flight is not None

    def dispatch(self, event: SessionEvent) -> Session:
        """Apply an event and publish the new session if it changed."""
        previous = self.session
        self.session = reduce_session(previous, event)
        if self.session != previous:
            logger.debug(f"Session {previous.status.value} -> {self.session.status.value} on {type(event).__name__}")
            pub.sendMessage(self.topic, session=self.session)
        return self.session

    def accept_file(self, media: MediaFile) -> Session:
        return self.dispatch(FileAccepted(media))

    def reset(self) -> Session:
        """Return to IDLE; any outstanding result will be discarded.

        The in-flight guard is left to the outstanding attempt, so no new
        request can start until the old one has returned.
        """
        logger.info("Session reset")
        return self.dispatch(SessionReset())

    async def start_transcription(self) -> bool:
        """Transcribe the selected file.

        The session moves to TRANSCRIBING before the remote call is awaited.
        Returns False when the request was ignored because another one is
        outstanding or no file is ready to transcribe.
        """
        if self.is_busy:
            logger.warning("Transcription already in progress, ignoring start request")
            return False

        session = self.session
        if session.status not in STARTABLE_STATES or session.file is None:
            logger.warning(f"Cannot start transcription from state {session.status.value}")
            return False

        attempt_id = next(self._attempt_ids)
        self._in_flight = attempt_id
        try:
            self.dispatch(TranscriptionStarted(attempt_id))
            logger.info(f"Started transcription attempt {attempt_id} for {session.file.name}")

            try:
                text = await self.transcription_service.transcribe(session.file)
            except Exception as e:
                logger.error(f"Transcription attempt {attempt_id} failed: {e}")
                outcome = TranscriptionFailed(attempt_id, str(e) or DEFAULT_ERROR_MESSAGE)
            else:
                if text:
                    outcome = TranscriptionSucceeded(attempt_id, text)
                else:
                    outcome = TranscriptionFailed(attempt_id, NO_TRANSCRIPTION_MESSAGE)
        finally:
            if self._in_flight == attempt_id:
                self._in_flight = None

        if self.session.attempt_id != attempt_id:
            logger.info(f"Discarding result of superseded attempt {attempt_id}")
        self.dispatch(outcome)
        return True
