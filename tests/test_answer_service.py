"""Tests for the answer orchestration."""
import asyncio
import uuid

import pytest

from equiphelper.agent.exceptions import UpstreamError, UpstreamTimeoutError
from equiphelper.agent.service import AnswerContext, AnswerService, normalize_answer
from equiphelper.tools.equipment import EquipmentDataSource
from tests.fakes import DATA_URL, FakeModel, mock_data_client


class TestAnswerService:
    @pytest.mark.asyncio
    async def test_generates_session_id_when_missing(self, answer_service):
        response = await answer_service.ask("How do I clean my Helmet?")

        assert uuid.UUID(response.session_id)
        assert response.answer == "Rinse it with water."

    @pytest.mark.asyncio
    async def test_selects_image_by_keyword(self, answer_service):
        response = await answer_service.ask("How do I clean my Helmet?")

        assert response.image_url == "/PPE Images/helmet.png"

    @pytest.mark.asyncio
    async def test_no_keyword_means_no_image(self, answer_service):
        response = await answer_service.ask("How should I store my boots?")

        assert response.image_url is None

    @pytest.mark.asyncio
    async def test_prompt_carries_context_question_and_rules(self, answer_service, fake_model):
        await answer_service.ask("How do I clean my Helmet?")

        prompt = fake_model.prompts[0]
        assert '"keywords":["helmet","faceshield"]' in prompt
        assert "User: How do I clean my Helmet?" in prompt
        assert "Relevant image: " in prompt
        assert "Don't use the character '(' ,')' ,'!' , '[', ']', '*'" in prompt

    @pytest.mark.asyncio
    async def test_same_session_accumulates_history(self, answer_service, fake_model, transcripts):
        first = await answer_service.ask("How do I clean my helmet?", "session-1")
        fake_model.reply = "Store it away from sunlight."
        second = await answer_service.ask("And how do I store it?", "session-1")

        assert first.session_id == second.session_id == "session-1"
        assert transcripts.get("session-1") == [
            "User: How do I clean my helmet?",
            "Assistant: Rinse it with water.",
            "User: And how do I store it?",
            "Assistant: Store it away from sunlight.",
        ]
        assert "Current conversation: \n" in fake_model.prompts[0]
        assert (
            "Current conversation: User: How do I clean my helmet?\nAssistant: Rinse it with water.\n"
            in fake_model.prompts[1]
        )

    @pytest.mark.asyncio
    async def test_fetch_failure_leaves_transcript_untouched(self, failing_answer_service, transcripts, fake_model):
        with pytest.raises(UpstreamError):
            await failing_answer_service.ask("How do I clean my helmet?", "session-2")

        assert "session-2" not in transcripts
        assert fake_model.prompts == []

    @pytest.mark.asyncio
    async def test_slow_model_times_out(self, transcripts):
        class SlowModel:
            async def ainvoke(self, prompt):
                await asyncio.sleep(1)

        service = AnswerService(
            AnswerContext(
                model=SlowModel(),
                data_source=EquipmentDataSource([DATA_URL], client=mock_data_client()),
                transcripts=transcripts,
                llm_timeout=0.01,
            )
        )

        with pytest.raises(UpstreamTimeoutError):
            await service.ask("helmet?", "slow")
        assert transcripts.get("slow") == []

    @pytest.mark.asyncio
    async def test_escaped_newlines_are_restored(self, transcripts):
        service = AnswerService(
            AnswerContext(
                model=FakeModel(reply="  Step one\\nStep two  "),
                data_source=EquipmentDataSource([DATA_URL], client=mock_data_client()),
                transcripts=transcripts,
            )
        )

        response = await service.ask("boots?")

        assert response.answer == "Step one\nStep two"

    @pytest.mark.asyncio
    async def test_context_is_truncated(self, fake_model, transcripts):
        big = {"keywords": ["hood"], "imageUrl": "/PPE Images/hood.png", "notes": "x" * 500}
        service = AnswerService(
            AnswerContext(
                model=fake_model,
                data_source=EquipmentDataSource([DATA_URL], client=mock_data_client({DATA_URL: big})),
                transcripts=transcripts,
                context_max_chars=40,
            )
        )

        await service.ask("hood?")

        prompt = fake_model.prompts[0]
        context_line = next(line for line in prompt.splitlines() if line.startswith("Equipment Guide Context: "))
        assert len(context_line) == len("Equipment Guide Context: ") + 40


def test_normalize_answer():
    assert normalize_answer("\n a\\nb \n") == "a\nb"
