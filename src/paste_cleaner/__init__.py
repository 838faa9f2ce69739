# -*- coding: utf-8 -*-
"""
Paste Cleaner - Word processor HTML to clean semantic markup.
"""
__version__ = "1.0.0"

from .api import app  # noqa: E402
from .pipeline import MarkupPipeline, PipelineResult, normalize_markup  # noqa: E402

__all__ = ["app", "MarkupPipeline", "PipelineResult", "normalize_markup", "__version__"]
