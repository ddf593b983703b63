"""Shared fixtures wiring the answer service to test doubles."""
import pytest

from equiphelper.agent.memory import InMemoryTranscriptStore
from equiphelper.agent.service import AnswerContext, AnswerService
from equiphelper.tools.equipment import EquipmentDataSource
from tests.fakes import DATA_URL, FakeModel, mock_data_client


@pytest.fixture
def fake_model():
    return FakeModel()


@pytest.fixture
def transcripts():
    return InMemoryTranscriptStore()


@pytest.fixture
def answer_service(fake_model, transcripts):
    context = AnswerContext(
        model=fake_model,
        data_source=EquipmentDataSource([DATA_URL], client=mock_data_client()),
        transcripts=transcripts,
        fetch_timeout=5,
        llm_timeout=5,
    )
    return AnswerService(context)


@pytest.fixture
def failing_answer_service(fake_model, transcripts):
    context = AnswerContext(
        model=fake_model,
        data_source=EquipmentDataSource([DATA_URL], client=mock_data_client(fail=True)),
        transcripts=transcripts,
    )
    return AnswerService(context)
