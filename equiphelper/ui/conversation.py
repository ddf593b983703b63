"""Conversation state behind the equipHelper chat page."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from equiphelper.ui.client import AnswerPort
from equiphelper.ui.equipment import EquipmentCatalog, EquipmentCategory
from equiphelper.ui.export import export_to_pdf
from equiphelper.ui.messages import FALLBACK_TEXT, Message, greeting
from equiphelper.ui.rendering import Segment, render_message_text
from equiphelper.ui.storage import StoragePort

logger = logging.getLogger(__name__)

Exporter = Callable[[Sequence[Message], Path], Path]

DEFAULT_EXPORT_PATH = Path("equipHelper_Chat_History.pdf")


class ConversationController:
    """Owns the displayed messages, the pending question and the equipment selection.

    The message list starts with the synthetic greeting unless storage holds a
    previous conversation. The first real question replaces that greeting.
    """

    def __init__(
        self,
        answers: AnswerPort,
        storage: StoragePort,
        catalog: EquipmentCatalog | None = None,
        exporter: Exporter = export_to_pdf,
        export_path: Path | str = DEFAULT_EXPORT_PATH,
    ) -> None:
        self._answers = answers
        self._storage = storage
        self._exporter = exporter
        self.catalog = catalog or EquipmentCatalog()
        self.export_path = Path(export_path)

        self.question = ""
        self.selected_equipment: Optional[EquipmentCategory] = None
        self.loading = False

        stored = storage.load()
        if stored:
            self.messages: List[Message] = list(stored)
            self.first_visit = False
        else:
            self.messages = [greeting()]
            self.first_visit = True

    async def submit_question(self, text: Optional[str] = None) -> None:
        """Send ``text`` (or the pending question) and append the reply. Never raises."""
        text = self.question if text is None else text
        if not text.strip() or self.loading:
            return

        self.loading = True
        user_message = Message(text=text, type="user")
        if self.first_visit:
            self.first_visit = False
            self._update([*self.messages[1:], user_message])
        else:
            self._update([*self.messages, user_message])
        self.question = ""

        try:
            response = await self._answers.ask(text)
            reply = Message(text=response.answer, type="ai")
        except Exception as exc:
            logger.warning("Answer service request failed: %s", exc)
            reply = Message(text=FALLBACK_TEXT, type="ai")
        finally:
            self.loading = False
        self._update([*self.messages, reply])

    async def select_predefined_question(self, text: str) -> None:
        self.question = text
        await self.submit_question(text)

    def select_equipment(self, category: EquipmentCategory | str | None) -> None:
        self.selected_equipment = EquipmentCategory(category) if category else None
        self.question = ""

    def questions_for_selection(self) -> Tuple[str, ...]:
        return self.catalog.questions(self.selected_equipment)

    def clear_history(self) -> None:
        self.messages = [greeting()]
        self._storage.clear()
        self.first_visit = True
        self._answers.reset()

    def export_to_document(self, path: Path | str | None = None) -> Path:
        return self._exporter(list(self.messages), Path(path) if path else self.export_path)

    @staticmethod
    def render_message_text(text: str) -> List[Segment]:
        return render_message_text(text)

    def _update(self, messages: List[Message]) -> None:
        self.messages = messages
        if not messages:
            return
        try:
            self._storage.save(messages)
        except OSError as exc:
            logger.error("Could not persist chat history: %s", exc)
