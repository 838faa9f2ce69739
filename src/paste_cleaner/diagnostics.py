# -*- coding: utf-8 -*-
"""
Optional diagnostic artifacts: raw and cleaned paste content on disk.
"""
import logging
import time
from pathlib import Path

from .config import settings

logger = logging.getLogger(__name__)


class DiagnosticsWriter:
    """Persist intermediate paste content to a scratch directory."""

    def __init__(self, directory: Path | str | None = None, enabled: bool | None = None):
        self.directory = Path(directory) if directory is not None else settings.DIAGNOSTICS_DIR
        self.enabled = settings.ENABLE_DIAGNOSTICS if enabled is None else enabled

    def save(self, stage: str, content: str) -> Path | None:
        """
        Write ``content`` to ``paste-{stage}-{timestamp}.html``.

        Returns the written path, or None when disabled or the write failed.
        Diagnostics never interfere with the paste itself.
        """
        if not self.enabled:
            return None

        path = self.directory / f"paste-{stage}-{int(time.time() * 1000)}.html"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.warning(f"Could not write diagnostic artifact: {e}")
            return None

        logger.info("Diagnostic artifact saved", extra={"stage": stage, "path": str(path)})
        return path
