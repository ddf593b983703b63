"""Deadlines for calls to external collaborators."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Generic, Optional, TypeVar

from equiphelper.agent.exceptions import UpstreamError, UpstreamTimeoutError

T = TypeVar("T")


class OutcomeKind(str, Enum):
    SUCCESS = "success"
    TIMEOUT = "timeout"
    ERROR = "error"


@dataclass
class Outcome(Generic[T]):
    kind: OutcomeKind
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS

    def unwrap(self, stage: str) -> T:
        """Return the value or raise the matching answer service error."""
        if self.kind is OutcomeKind.SUCCESS:
            return self.value  # type: ignore[return-value]
        if self.kind is OutcomeKind.TIMEOUT:
            raise UpstreamTimeoutError(f"{stage} timed out", original_error=self.error)  # type: ignore[arg-type]
        raise UpstreamError(f"{stage} failed: {self.error}", original_error=self.error)  # type: ignore[arg-type]


async def run_with_deadline(awaitable: Awaitable[T], timeout: float | None) -> Outcome[T]:
    """Await ``awaitable`` for at most ``timeout`` seconds and report how it ended."""
    try:
        value: Any = await asyncio.wait_for(awaitable, timeout=timeout)
    except asyncio.TimeoutError as exc:
        return Outcome(kind=OutcomeKind.TIMEOUT, error=exc)
    except Exception as exc:
        return Outcome(kind=OutcomeKind.ERROR, error=exc)
    return Outcome(kind=OutcomeKind.SUCCESS, value=value)
