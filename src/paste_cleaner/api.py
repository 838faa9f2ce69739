# -*- coding: utf-8 -*-
"""
FastAPI API for the paste cleaning service.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from . import __version__
from .classifier import count_anchors
from .config import settings
from .logging_config import setup_logging
from .middleware import RequestIDMiddleware
from .models import (
    ClassifyRequest,
    ClassifyResponse,
    CleanRequest,
    CleanResponse,
    HealthResponse,
    PasteRequest,
    StatusResponse,
)
from .paste import PasteController, PasteOutcome
from .pipeline import content_pipeline

# Setup structured logging
setup_logging()
logger = logging.getLogger(__name__)

# Process-wide toggle state lives here, never in the pipeline
paste_controller = PasteController()


# noinspection PyUnusedLocal
@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifecycle management."""
    logger.info(
        "Starting Paste Cleaner service",
        extra={"version": __version__, "enabled": paste_controller.enabled},
    )
    yield
    logger.info("Shutting down Paste Cleaner service")


app = FastAPI(
    title="Paste Cleaner Service",
    description="Turns word processor HTML into clean semantic markup",
    version=__version__,
    lifespan=lifespan,
)

# Middleware stack (order matters: last added = first executed)
app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)


def _check_size(content: str) -> None:
    if len(content.encode("utf-8")) > settings.MAX_CONTENT_SIZE:
        raise HTTPException(status_code=413, detail="Content too large")


def _to_response(outcome: PasteOutcome) -> CleanResponse:
    return CleanResponse(
        output=outcome.text,
        classification=outcome.classification.value if outcome.classification else None,
        cleaned=outcome.cleaned,
        fallback=outcome.fallback,
        notice=outcome.notice,
        notice_level=outcome.notice_level,
        steps_applied=outcome.steps_applied,
        content_length=len(outcome.text),
    )


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Service health endpoint."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        enabled=paste_controller.enabled,
    )


@app.post("/clean", response_model=CleanResponse)
async def clean_content(request: CleanRequest) -> CleanResponse:
    """
    Clean pasted content and return the text to insert.

    - **content**: pasted content, HTML when the source had it
    - **plain_text**: plain-text rendering, used for code and fallbacks
    - **language_id** / **file_name**: target document, for the support check
    - **force**: clean even when the toggle is disabled
    """
    _check_size(request.content)
    logger.info("Clean request received", extra={"content_length": len(request.content)})

    outcome = paste_controller.clean(
        request.content,
        plain_text=request.plain_text,
        language_id=request.language_id,
        file_name=request.file_name,
        force=request.force,
    )

    logger.info(
        "Clean completed",
        extra={
            "classification": outcome.classification.value if outcome.classification else None,
            "fallback": outcome.fallback,
            "output_length": len(outcome.text),
        },
    )
    return _to_response(outcome)


@app.post("/classify", response_model=ClassifyResponse)
async def classify_content(request: ClassifyRequest) -> ClassifyResponse:
    """Classify content without transforming it."""
    _check_size(request.content)
    anchors, hrefs = count_anchors(request.content)
    return ClassifyResponse(
        classification=content_pipeline.classify(request.content).value,
        anchors=anchors,
        hrefs=hrefs,
    )


@app.post("/paste", response_model=CleanResponse)
async def paste_clipboard(request: PasteRequest) -> CleanResponse:
    """Read the host clipboard and return the text to insert."""
    outcome = await paste_controller.paste(
        language_id=request.language_id,
        file_name=request.file_name,
        force=request.force,
    )
    return _to_response(outcome)


@app.post("/toggle", response_model=StatusResponse)
async def toggle_paste() -> StatusResponse:
    """Flip the HTML paste toggle."""
    enabled = paste_controller.toggle()
    return StatusResponse(enabled=enabled, label=paste_controller.status_label())


@app.get("/status", response_model=StatusResponse)
async def paste_status() -> StatusResponse:
    """Current HTML paste toggle state."""
    return StatusResponse(
        enabled=paste_controller.enabled, label=paste_controller.status_label()
    )
