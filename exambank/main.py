"""Exam Bank API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ExamBankError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Settings validated and the document client built once, in the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, closes the
      GitHub HTTP client on shutdown
    - Error handlers live in api/error_handlers.py
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from exambank.api.error_handlers import register_error_handlers
from exambank.api.routes import exam, health, questions, scores
from exambank.config import get_settings
from exambank.infrastructure.document_store import (
    close_document_client, init_document_client,
)
from exambank.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_document_client(settings)
    logger.info(
        f"Exam Bank API started (document backend: {settings.document_backend})",
    )
    yield
    await close_document_client()
    logger.info("Exam Bank API shutting down")


app = FastAPI(
    title="Exam Bank API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(questions.router)
app.include_router(exam.router)
app.include_router(scores.router)

register_error_handlers(app)
