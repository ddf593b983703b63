"""Session transcripts for context continuity between questions."""
from __future__ import annotations

import time
from threading import RLock
from typing import Callable, Dict, List, Optional, Protocol, Tuple


class TranscriptStore(Protocol):
    def get(self, session_id: str) -> List[str]:
        ...

    def append(self, session_id: str, *turns: str) -> None:
        ...


class InMemoryTranscriptStore:
    """Process-local transcripts, optionally dropped after ``ttl_seconds`` of inactivity.

    Without a TTL transcripts live for the lifetime of the process.
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, List[str]]] = {}
        self._lock = RLock()

    def get(self, session_id: str) -> List[str]:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None:
                return []
            touched_at, turns = entry
            if self._expired(touched_at):
                del self._entries[session_id]
                return []
            return list(turns)

    def append(self, session_id: str, *turns: str) -> None:
        with self._lock:
            entry = self._entries.get(session_id)
            if entry is None or self._expired(entry[0]):
                history: List[str] = []
            else:
                history = entry[1]
            history.extend(turns)
            self._entries[session_id] = (self._clock(), history)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._entries

    def _expired(self, touched_at: float) -> bool:
        if self.ttl_seconds is None:
            return False
        return self._clock() - touched_at > self.ttl_seconds
