"""Monitoring helpers (Sentry, LangSmith tracing, Prometheus)."""
from __future__ import annotations

import logging
import os
from typing import MutableMapping

import sentry_sdk
from prometheus_client import Counter, Histogram

from equiphelper.app.config import Settings

logger = logging.getLogger(__name__)

ASK_REQUESTS = Counter(
    "ask_requests_total", "Total ask requests", labelnames=("outcome",)
)
ASK_LATENCY = Histogram(
    "ask_latency_seconds", "Latency of ask responses"
)
UPSTREAM_FAILURES = Counter(
    "upstream_failures_total",
    "Reference data and model calls that failed or timed out",
    labelnames=("stage", "kind"),
)


def setup_observability(settings: Settings, environ: MutableMapping[str, str] = os.environ) -> None:
    """Start Sentry and turn on LangSmith tracing of the model call when configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            release=f"equiphelper@{settings.version}",
            traces_sample_rate=0.2,
            send_default_pii=False,
        )
        logger.info("Sentry initialized (environment=%s)", settings.environment)

    if settings.langsmith_api_key:
        # LangChain reads these when the model is invoked
        environ.setdefault("LANGSMITH_TRACING", "true")
        environ.setdefault("LANGSMITH_API_KEY", settings.langsmith_api_key)
        environ.setdefault("LANGSMITH_PROJECT", settings.langsmith_project)
        logger.info("LangSmith tracing enabled (project=%s)", settings.langsmith_project)


def record_upstream_failure(stage: str, kind: str, session_id: str, error: BaseException | None) -> None:
    """Count a failed reference fetch or model call and leave a trail for the error report."""
    UPSTREAM_FAILURES.labels(stage=stage, kind=kind).inc()
    logger.warning("Upstream %s %s (session=%s): %r", stage, kind, session_id, error)
    sentry_sdk.add_breadcrumb(
        category="upstream",
        message=f"{stage} {kind}",
        level="warning",
        data={"stage": stage, "kind": kind, "session_id": session_id, "error": repr(error)},
    )
