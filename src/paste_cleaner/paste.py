# -*- coding: utf-8 -*-
"""
Paste controller: the caller side of the pipeline.

Owns the enable/disable toggle, decides whether the target document gets
cleaned HTML, and guarantees that every paste yields insertable text, even
when cleaning fails.
"""
import logging
from dataclasses import dataclass, field
from typing import Literal

from .classifier import Classification
from .clipboard import ClipboardReader, SourceUnavailable
from .config import settings
from .diagnostics import DiagnosticsWriter
from .pipeline import MarkupPipeline, content_pipeline

logger = logging.getLogger(__name__)

EMPTY_CLIPBOARD_NOTICE = "Clipboard is empty"


@dataclass
class PasteOutcome:
    """What to insert at the cursor, plus an optional user notice."""

    text: str
    classification: Classification | None = None
    cleaned: bool = False
    fallback: bool = False
    notice: str | None = None
    notice_level: Literal["info", "warning", "error"] | None = None
    steps_applied: list[str] = field(default_factory=list)


def is_supported_document(language_id: str | None = None, file_name: str | None = None) -> bool:
    """
    Check whether the target document should receive cleaned HTML.

    An unknown target (no language and no file name) counts as supported.
    """
    if language_id is None and file_name is None:
        return True
    if language_id and language_id in settings.SUPPORTED_LANGUAGES:
        return True
    return bool(file_name) and any(
        file_name.endswith(extension) for extension in settings.SUPPORTED_EXTENSIONS
    )


class PasteController:
    """Explicit owner of the paste toggle and of the insert-no-matter-what guarantee."""

    def __init__(
        self,
        enabled: bool | None = None,
        reader: ClipboardReader | None = None,
        diagnostics: DiagnosticsWriter | None = None,
        pipeline: MarkupPipeline | None = None,
    ):
        self._enabled = settings.PASTE_ENABLED_BY_DEFAULT if enabled is None else enabled
        self.reader = reader or ClipboardReader()
        self.diagnostics = diagnostics or DiagnosticsWriter()
        self.pipeline = pipeline or content_pipeline

    @property
    def enabled(self) -> bool:
        return self._enabled

    def toggle(self) -> bool:
        """Flip the toggle and return the new state."""
        self._enabled = not self._enabled
        logger.info("HTML paste toggled", extra={"enabled": self._enabled})
        return self._enabled

    def status_label(self) -> str:
        return f"HTML Paste: {'enabled' if self._enabled else 'disabled'}"

    def clean(
        self,
        content: str | None,
        plain_text: str | None = None,
        language_id: str | None = None,
        file_name: str | None = None,
        force: bool = False,
    ) -> PasteOutcome:
        """
        Turn pasted content into the text to insert.

        ``content`` is the richest representation available (HTML when the
        source had it); ``plain_text`` is the source's own plain rendering.
        """
        source = content if content and content.strip() else (plain_text or "")
        if not source.strip():
            logger.info("Nothing to paste")
            return PasteOutcome(text="", notice=EMPTY_CLIPBOARD_NOTICE, notice_level="warning")

        if not (self._enabled or force) or not is_supported_document(language_id, file_name):
            logger.debug(
                "Plain paste",
                extra={"enabled": self._enabled, "language_id": language_id, "file_name": file_name},
            )
            return PasteOutcome(text=plain_text if plain_text else source)

        result = self.pipeline.process(source)

        if not result.success:
            logger.warning("Falling back to unprocessed content", extra={"error": result.error})
            return PasteOutcome(
                text=plain_text if plain_text else source,
                fallback=True,
                notice=f"Failed to paste as HTML: {result.error}",
                notice_level="error",
            )

        text = result.html
        if result.classification is Classification.CODE_SNIPPET and plain_text:
            text = plain_text

        if result.classification is Classification.NEEDS_VENDOR_CLEANUP:
            self.diagnostics.save("raw", source)
            self.diagnostics.save("cleaned", text)

        return PasteOutcome(
            text=text,
            classification=result.classification,
            cleaned=result.classification
            in (Classification.NEEDS_VENDOR_CLEANUP, Classification.NEEDS_CLEANING),
            steps_applied=list(result.steps_applied),
        )

    async def paste(
        self,
        language_id: str | None = None,
        file_name: str | None = None,
        force: bool = False,
    ) -> PasteOutcome:
        """Read the clipboard and clean it."""
        try:
            content = await self.reader.read()
        except SourceUnavailable as e:
            logger.info(f"Clipboard unavailable: {e}")
            return PasteOutcome(text="", notice=EMPTY_CLIPBOARD_NOTICE, notice_level="warning")

        # No rich flavour: plain text goes in as typed, even if it looks like markup
        if not content.html:
            return PasteOutcome(text=content.plain_text)

        return self.clean(
            content.best,
            plain_text=content.plain_text,
            language_id=language_id,
            file_name=file_name,
            force=force,
        )
