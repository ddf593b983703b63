"""FastAPI application entry point."""
from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from threading import Lock

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from equiphelper.agent.exceptions import AnswerServiceError, UpstreamTimeoutError
from equiphelper.agent.llm import build_model
from equiphelper.agent.memory import InMemoryTranscriptStore
from equiphelper.agent.service import AnswerContext, AnswerService
from equiphelper.app.config import Settings, get_settings, settings
from equiphelper.app.models import AskRequest, AskResponse, ConversationResponse, ErrorResponse, HealthResponse
from equiphelper.monitoring.observability import ASK_LATENCY, ASK_REQUESTS, setup_observability
from equiphelper.tools.equipment import EquipmentDataSource

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

QUESTION_REQUIRED = "Question is required"
PROCESSING_FAILED = "Error processing the request"

setup_observability(settings)


def _build_service(settings: Settings) -> AnswerService:
    context = AnswerContext(
        model=build_model(settings),
        data_source=EquipmentDataSource(settings.equipment_data_urls),
        transcripts=InMemoryTranscriptStore(ttl_seconds=settings.transcript_ttl_seconds),
        context_max_chars=settings.context_max_chars,
        fetch_timeout=settings.fetch_timeout_seconds,
        llm_timeout=settings.llm_timeout_seconds,
    )
    return AnswerService(context)


_answer_service: AnswerService | None = None
_service_lock = Lock()


def get_answer_service() -> AnswerService:
    # Runs in the threadpool; one service (and one transcript store) per process
    global _answer_service
    if _answer_service is None:
        with _service_lock:
            if _answer_service is None:
                _answer_service = _build_service(get_settings())
                logger.info("Initialized AnswerService")
    return _answer_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _answer_service
    yield
    if _answer_service is not None:
        await _answer_service.aclose()
        _answer_service = None
        logger.info("Closed AnswerService")


app = FastAPI(title=settings.app_name, version=settings.version, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[str(origin) for origin in settings.allowed_origins] or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected malformed ask body: %s", exc.errors())
    ASK_REQUESTS.labels(outcome="rejected").inc()
    return JSONResponse(status_code=400, content=ErrorResponse(error=QUESTION_REQUIRED).model_dump())


@app.get("/")
async def root():
    return {"status": "ok", "message": "equipHelper answer service is running"}


@app.get("/health", response_model=HealthResponse)
def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(status="ok", environment=settings.environment, version=settings.version)


@app.get("/metrics")
def metrics() -> PlainTextResponse:
    payload = generate_latest()  # type: ignore[arg-type]
    return PlainTextResponse(payload, media_type=CONTENT_TYPE_LATEST)


@app.post(
    "/api/ask",
    response_model=AskResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def ask(request: AskRequest, service: AnswerService = Depends(get_answer_service)):
    if not request.question:
        ASK_REQUESTS.labels(outcome="rejected").inc()
        return JSONResponse(status_code=400, content=ErrorResponse(error=QUESTION_REQUIRED).model_dump())

    start = time.perf_counter()
    try:
        response = await service.ask(request.question, request.session_id)
    except AnswerServiceError as exc:
        kind = "timeout" if isinstance(exc, UpstreamTimeoutError) else "error"
        logger.exception("Ask failed (%s): %s", kind, exc.message)
        ASK_REQUESTS.labels(outcome=kind).inc()
        return JSONResponse(status_code=500, content=ErrorResponse(error=PROCESSING_FAILED).model_dump())
    except Exception:
        logger.exception("Ask failed unexpectedly")
        ASK_REQUESTS.labels(outcome="error").inc()
        return JSONResponse(status_code=500, content=ErrorResponse(error=PROCESSING_FAILED).model_dump())

    ASK_LATENCY.observe(time.perf_counter() - start)
    ASK_REQUESTS.labels(outcome="answered").inc()
    return response


@app.get("/api/conversation/{session_id}", response_model=ConversationResponse, response_model_by_alias=True)
async def conversation_history(
    session_id: str, service: AnswerService = Depends(get_answer_service)
) -> ConversationResponse:
    return ConversationResponse(session_id=session_id, transcript=service.transcript(session_id))
