"""HTTP client for the answer service."""
from __future__ import annotations

from typing import Optional, Protocol

import httpx

from equiphelper.app.models import AskResponse


class AnswerPort(Protocol):
    async def ask(self, question: str) -> AskResponse:
        ...

    def reset(self) -> None:
        ...


class AnswerClient:
    """Posts questions to ``/api/ask`` and keeps the session id the service hands back.

    Without an injected client a short-lived one is opened per question, so the
    instance can be reused across event loops.
    """

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None, timeout: float = 90.0) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self.session_id: Optional[str] = None

    async def ask(self, question: str) -> AskResponse:
        payload = {"question": question}
        if self.session_id:
            payload["sessionId"] = self.session_id
        if self._client is not None:
            resp = await self._client.post("/api/ask", json=payload)
        else:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout) as client:
                resp = await client.post("/api/ask", json=payload)
        resp.raise_for_status()
        answer = AskResponse.model_validate(resp.json())
        self.session_id = answer.session_id
        return answer

    def reset(self) -> None:
        self.session_id = None
