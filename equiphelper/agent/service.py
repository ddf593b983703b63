"""Answer orchestration: reference context, prompt, model call, transcript."""
from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

from langchain_core.prompts import PromptTemplate

from equiphelper.agent.deadline import run_with_deadline
from equiphelper.agent.memory import TranscriptStore
from equiphelper.agent.prompts import ANSWER_TEMPLATE
from equiphelper.app.models import AskResponse
from equiphelper.monitoring.observability import record_upstream_failure
from equiphelper.tools.equipment import EquipmentDataSource, build_context, match_image_url

logger = logging.getLogger(__name__)


@dataclass
class AnswerContext:
    model: Any
    data_source: EquipmentDataSource
    transcripts: TranscriptStore
    context_max_chars: int = 10000
    fetch_timeout: Optional[float] = None
    llm_timeout: Optional[float] = None


class AnswerService:
    """Answers one equipment question per call, continuing the session transcript."""

    def __init__(self, context: AnswerContext) -> None:
        self.context = context
        self.prompt = PromptTemplate(
            template=ANSWER_TEMPLATE,
            input_variables=["context", "chat_history", "question"],
        )

    async def ask(self, question: str, session_id: Optional[str] = None) -> AskResponse:
        """Produce an answer for ``question``.

        The transcript is only written once the model has answered, so a failed
        call leaves it as it was.

        Raises:
            AnswerServiceError: reference data or the model failed or timed out.
        """
        session = session_id or str(uuid.uuid4())
        history = self.context.transcripts.get(session)

        outcome = await run_with_deadline(self.context.data_source.fetch_all(), self.context.fetch_timeout)
        if not outcome.ok:
            record_upstream_failure("reference_data", outcome.kind.value, session, outcome.error)
        documents = outcome.unwrap("reference data fetch")

        prompt = self.prompt.format(
            context=build_context(documents, self.context.context_max_chars),
            chat_history="\n".join(history),
            question=question,
        )

        outcome = await run_with_deadline(self.context.model.ainvoke(prompt), self.context.llm_timeout)
        if not outcome.ok:
            record_upstream_failure("llm", outcome.kind.value, session, outcome.error)
        answer = normalize_answer(_response_text(outcome.unwrap("model call")))

        image_url = match_image_url(documents, question)

        self.context.transcripts.append(session, f"User: {question}", f"Assistant: {answer}")

        return AskResponse(answer=answer, image_url=image_url, session_id=session)

    def transcript(self, session_id: str) -> List[str]:
        return self.context.transcripts.get(session_id)

    async def aclose(self) -> None:
        await self.context.data_source.aclose()


def normalize_answer(raw: str) -> str:
    # Models sometimes return the literal two-character sequence \n
    return raw.strip().replace("\\n", "\n")


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        return "".join(
            part.get("text", "") if isinstance(part, dict) else str(part) for part in content
        )
    return str(content)
