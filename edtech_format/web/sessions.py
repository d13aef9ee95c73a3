"""
In-memory session store for development and tests.

Why: The course page needs a per-user editing flag and a session key that
state-changing links carry. Cookies hold only an opaque session id; session
data stays server-side. Replace with a shared store in production.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional
import secrets
import time


def _now() -> int:
    return int(time.time())


@dataclass
class SessionRecord:
    session_id: str
    sub: str
    name: str
    capabilities: FrozenSet[str] = field(default_factory=frozenset)
    sesskey: str = ""
    editing: bool = False
    expires_at: Optional[int] = None


class SessionStore:
    def __init__(self) -> None:
        self._data: Dict[str, SessionRecord] = {}

    def create(
        self,
        *,
        sub: str,
        name: str = "",
        capabilities: Iterable[str] = (),
        ttl_seconds: int = 3600,
    ) -> SessionRecord:
        sid = secrets.token_urlsafe(24)
        rec = SessionRecord(
            session_id=sid,
            sub=sub,
            name=name,
            capabilities=frozenset(capabilities),
            sesskey=secrets.token_hex(5),
            expires_at=_now() + ttl_seconds,
        )
        self._data[sid] = rec
        return rec

    def get(self, session_id: str) -> Optional[SessionRecord]:
        rec = self._data.get(session_id)
        if not rec:
            return None
        if rec.expires_at and rec.expires_at < _now():
            self._data.pop(session_id, None)
            return None
        return rec

    def set_editing(self, session_id: str, editing: bool) -> bool:
        rec = self.get(session_id)
        if not rec:
            return False
        rec.editing = editing
        return True


__all__ = ["SessionRecord", "SessionStore"]
