"""
In-memory design sessions.

Each session owns one SchemaBuilder. Sessions live in this process only;
a restart drops unsaved designs.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from formengine.kernel.builder import SchemaBuilder


@dataclass
class DesignSession:
    session_id: str
    builder: SchemaBuilder
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def touch(self) -> None:
        self.updated_at = datetime.now(UTC)


class DesignSessionStore:
    """Tracks open design sessions by id."""

    def __init__(self):
        self._sessions: dict[str, DesignSession] = {}

    def create(self) -> DesignSession:
        session_id = secrets.token_urlsafe(8)
        session = DesignSession(session_id=session_id, builder=SchemaBuilder())
        # Keep the session's updated_at in step with builder changes
        session.builder.subscribe(lambda _fields: session.touch())
        self._sessions[session_id] = session
        return session

    def get(self, session_id: str) -> DesignSession | None:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def cleanup_idle(self, max_idle_minutes: int) -> int:
        """
        Drop sessions untouched for longer than max_idle_minutes.

        Returns:
            Number of sessions dropped
        """
        cutoff = datetime.now(UTC) - timedelta(minutes=max_idle_minutes)
        stale = [sid for sid, s in self._sessions.items() if s.updated_at < cutoff]
        for sid in stale:
            del self._sessions[sid]
        return len(stale)


# Global session store instance
design_sessions = DesignSessionStore()
