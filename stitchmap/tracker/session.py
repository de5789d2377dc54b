"""
WorkSessionService - Work session lifecycle and navigation.

Combines the SessionStore (persistence) with the navigator and progress
functions:
- Start / pause / resume / abandon sessions
- Advance and retreat one stitch, persisting after every move
- Progress reports for display
"""

import logging
import threading
from datetime import datetime

from stitchmap.schemas import Pattern, Position, SessionStatus, WorkSession, stitch_count

from .navigator import settle, step_backward, step_forward
from .progress import ProgressReport, compute_progress
from .store import SessionStore

logger = logging.getLogger(__name__)


class SessionError(ValueError):
    """Requested lifecycle transition is not allowed."""


class WorkSessionService:
    """
    Drive work sessions through a pattern.

    Each advance/retreat is a load-step-persist cycle on one session; the
    service holds a lock per session id so concurrent requests for the same
    session run one after the other.
    """

    def __init__(self, store: SessionStore):
        self.store = store
        self._locks: dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def _lock_for(self, session_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(session_id, threading.Lock())

    def _refresh(self, session: WorkSession) -> WorkSession:
        """Overwrite session's mutable state with the stored row."""
        stored = self.store.get(session.id)
        session.position = stored.position
        session.status = stored.status
        session.last_activity_at = stored.last_activity_at
        session.completed_at = stored.completed_at
        return session

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self, pattern: Pattern) -> WorkSession:
        """
        Start a new active session at the first stitch of a pattern.

        Raises:
            SessionError: pattern has no groups or no stitches
        """
        if not pattern.instruction_groups:
            raise SessionError(f"Pattern '{pattern.name}' has no instruction groups")
        if stitch_count(pattern) == 0:
            raise SessionError(f"Pattern '{pattern.name}' has no stitches")

        position = Position()
        settle(position, pattern)
        session = self.store.create(WorkSession(pattern_name=pattern.name, position=position))
        logger.info(f"Started session {session.id} on '{pattern.name}' ({stitch_count(pattern)} stitches)")
        return session

    def get(self, session_id: int) -> WorkSession:
        return self.store.get(session_id)

    def pause(self, session: WorkSession):
        with self._lock_for(session.id):
            self._refresh(session)
            if session.status != SessionStatus.ACTIVE:
                raise SessionError(f"Session {session.id} is not active")
            session.status = SessionStatus.PAUSED
            session.last_activity_at = datetime.now()
            self.store.update(session)
        logger.info(f"Paused session {session.id}")

    def resume(self, session: WorkSession):
        with self._lock_for(session.id):
            self._refresh(session)
            if session.status != SessionStatus.PAUSED:
                raise SessionError(f"Session {session.id} is not paused")
            session.status = SessionStatus.ACTIVE
            session.last_activity_at = datetime.now()
            self.store.update(session)
        logger.info(f"Resumed session {session.id}")

    def abandon(self, session_id: int):
        self.store.delete(session_id)
        with self._locks_guard:
            self._locks.pop(session_id, None)
        logger.info(f"Abandoned session {session_id}")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def advance(self, session: WorkSession, pattern: Pattern) -> bool:
        """
        Move forward one stitch and persist.

        The stored row is reloaded into session first, so a stale object
        steps from the latest saved position.

        Returns:
            True if this finished the pattern (session is now completed)

        Raises:
            SessionError: session is not active
        """
        with self._lock_for(session.id):
            self._refresh(session)
            if session.status != SessionStatus.ACTIVE:
                raise SessionError(f"Session {session.id} is {session.status.value}, not active")

            completed = step_forward(session.position, pattern)
            now = datetime.now()
            session.last_activity_at = now
            if completed:
                session.status = SessionStatus.COMPLETED
                session.completed_at = now
            self.store.update(session)

        if completed:
            logger.info(f"Session {session.id} completed '{pattern.name}'")
        else:
            logger.debug(f"Session {session.id} advanced to {session.position.as_tuple()}")
        return completed

    def retreat(self, session: WorkSession, pattern: Pattern) -> bool:
        """
        Move back one stitch and persist.

        A completed session is reopened onto its last stitch.

        Returns:
            False if the session was already on the first stitch

        Raises:
            SessionError: session is paused
        """
        with self._lock_for(session.id):
            self._refresh(session)
            if session.status == SessionStatus.PAUSED:
                raise SessionError(f"Session {session.id} is paused")

            moved = step_backward(session.position, pattern)
            if session.status == SessionStatus.COMPLETED:
                session.status = SessionStatus.ACTIVE
                session.completed_at = None
                logger.info(f"Reopened completed session {session.id}")
            session.last_activity_at = datetime.now()
            self.store.update(session)

        logger.debug(f"Session {session.id} retreated to {session.position.as_tuple()} (moved={moved})")
        return moved

    def progress(self, session: WorkSession, pattern: Pattern) -> ProgressReport:
        return compute_progress(session.position, pattern)
