# -*- coding: utf-8 -*-
"""
Pydantic data models for the API.
"""
from typing import Literal

from pydantic import BaseModel, Field


class CleanRequest(BaseModel):
    """Cleaning request schema."""

    content: str = Field(..., description="Pasted content (HTML when available)")
    plain_text: str | None = Field(
        default=None, description="Plain-text rendering of the same content"
    )
    language_id: str | None = Field(default=None, description="Target document language")
    file_name: str | None = Field(default=None, description="Target document file name")
    force: bool = Field(
        default=False, description="Clean even when the paste toggle is disabled"
    )


class PasteRequest(BaseModel):
    """Clipboard paste request schema."""

    language_id: str | None = None
    file_name: str | None = None
    force: bool = False


class CleanResponse(BaseModel):
    """Cleaning response schema."""

    output: str
    classification: str | None = None
    cleaned: bool = False
    fallback: bool = False
    notice: str | None = None
    notice_level: Literal["info", "warning", "error"] | None = None
    steps_applied: list[str] = Field(default_factory=list)
    content_length: int = 0


class ClassifyRequest(BaseModel):
    """Classification request schema."""

    content: str


class ClassifyResponse(BaseModel):
    """Classification response schema."""

    classification: str
    anchors: int = 0
    hrefs: int = 0


class StatusResponse(BaseModel):
    """Paste toggle state."""

    enabled: bool
    label: str


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    version: str
    enabled: bool = False
