"""Client-local persistence of the displayed conversation."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Protocol, Sequence

from pydantic import TypeAdapter, ValidationError

from equiphelper.ui.messages import Message

logger = logging.getLogger(__name__)

STORAGE_KEY = "chatMessages"

_messages_adapter = TypeAdapter(List[Message])


class StoragePort(Protocol):
    def load(self) -> Optional[List[Message]]:
        ...

    def save(self, messages: Sequence[Message]) -> None:
        ...

    def clear(self) -> None:
        ...


class InMemoryStorage:
    def __init__(self, messages: Optional[Sequence[Message]] = None) -> None:
        self._raw: Optional[str] = None
        if messages is not None:
            self.save(messages)

    def load(self) -> Optional[List[Message]]:
        if self._raw is None:
            return None
        return _messages_adapter.validate_json(self._raw)

    def save(self, messages: Sequence[Message]) -> None:
        self._raw = _messages_adapter.dump_json(list(messages)).decode("utf-8")

    def clear(self) -> None:
        self._raw = None


class JsonFileStorage:
    """Stores the sequence as ``<directory>/<key>.json``."""

    def __init__(self, directory: Path, key: str = STORAGE_KEY) -> None:
        self.path = Path(directory) / f"{key}.json"

    def load(self) -> Optional[List[Message]]:
        if not self.path.exists():
            return None
        try:
            return _messages_adapter.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as exc:
            logger.warning("Ignoring unreadable chat history at %s: %s", self.path, exc)
            return None

    def save(self, messages: Sequence[Message]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [message.model_dump() for message in messages]
        self.path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
