"""In-memory session storage with TTL eviction."""

from .store import SessionStore, new_session_id, session_summary

__all__ = ["SessionStore", "new_session_id", "session_summary"]
