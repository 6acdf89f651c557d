"""Session storage for generated playlists.

Responsibilities:
- Keep generated sessions in memory keyed by random session id.
- Evict sessions older than a fixed TTL, on read and on explicit purge.
- Render the debugging summary of one stored session.

The store is process-local and is not shared between workers.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict
from datetime import datetime, timezone
import secrets
import time

from ..config import GeneratorConfig
from ..models.datatypes import GenerationResult, Session


def new_session_id() -> str:
    """Return a random 32-character hex session id."""

    return secrets.token_hex(16)


class SessionStore:
    """Map session ids to sessions with creation-time TTL eviction."""

    def __init__(
        self,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize an empty store with a TTL and an epoch-seconds clock."""

        if ttl_seconds <= 0:
            raise ValueError("`ttl_seconds` must be positive.")
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, Session] = {}

    @classmethod
    def from_config(
        cls,
        config: GeneratorConfig,
        clock: Callable[[], float] = time.time,
    ) -> SessionStore:
        """Create a store whose TTL comes from `config.session_ttl_seconds`."""

        return cls(ttl_seconds=config.session_ttl_seconds, clock=clock)

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def now(self) -> float:
        return self._clock()

    def put(self, session: Session) -> None:
        """Store or replace a session."""

        self._sessions[session.session_id] = session

    def record(self, result: GenerationResult) -> Session:
        """Store a generation result as a session created now."""

        session = Session.from_result(result, created=self.now())
        self.put(session)
        return session

    def get(self, session_id: str) -> Session | None:
        """Return a live session, evicting it instead when expired."""

        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session):
            del self._sessions[session_id]
            return None
        return session

    def touch(self, session_id: str) -> Session | None:
        """Return a live session and record the access time."""

        session = self.get(session_id)
        if session is not None:
            session.last_accessed = self._clock()
        return session

    def purge_expired(self) -> list[str]:
        """Remove every expired session and return the removed ids."""

        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if self._is_expired(session)
        ]
        for session_id in expired:
            del self._sessions[session_id]
        return expired

    def _is_expired(self, session: Session) -> bool:
        return self._clock() - session.created > self._ttl_seconds


def session_summary(session: Session) -> dict[str, object]:
    """Return the debugging view of a stored session."""

    created = datetime.fromtimestamp(session.created, tz=timezone.utc)
    return {
        "sessionId": session.session_id,
        "created": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        "totalTokens": len(session.tokens),
        "matchedPhrases": len(session.matches),
        "clips": len(session.script),
        "duration": sum(item.duration for item in session.script),
        "script": [asdict(item) for item in session.script],
    }
