"""Equipment reference data: remote JSON documents used as prompt context."""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, List, Optional, Sequence

import httpx

from equiphelper.app.models import EquipmentEntry

logger = logging.getLogger(__name__)


class EquipmentDataSource:
    """Fetches every configured reference document, fresh on each call."""

    def __init__(self, urls: Sequence[str], client: httpx.AsyncClient | None = None) -> None:
        self.urls = list(urls)
        self._client = client or httpx.AsyncClient(timeout=None)

    async def fetch_all(self) -> List[Any]:
        """Return the parsed documents in configured order; any failure fails the whole fetch."""
        return list(await asyncio.gather(*(self._fetch(url) for url in self.urls)))

    async def _fetch(self, url: str) -> Any:
        resp = await self._client.get(url)
        resp.raise_for_status()
        return resp.json()

    async def aclose(self) -> None:
        await self._client.aclose()


def build_context(documents: Sequence[Any], max_chars: int) -> str:
    combined = "\n".join(
        json.dumps(document, separators=(",", ":"), ensure_ascii=False) for document in documents
    )
    return combined[:max_chars]


def iter_entries(documents: Sequence[Any]) -> List[EquipmentEntry]:
    """Flatten documents into reference entries; arrays contribute their object items."""
    entries: List[EquipmentEntry] = []
    for document in documents:
        items = document if isinstance(document, list) else [document]
        for item in items:
            if isinstance(item, dict):
                entries.append(EquipmentEntry.model_validate(item))
    return entries


def match_image_url(documents: Sequence[Any], question: str) -> Optional[str]:
    """Pick the image of the first entry whose keyword appears in the question."""
    lowered = question.lower()
    for entry in iter_entries(documents):
        matched = next((kw for kw in entry.keywords if kw.lower() in lowered), None)
        if matched is not None:
            logger.info("Matched keyword: %s", matched)
            return entry.image_url
    return None
