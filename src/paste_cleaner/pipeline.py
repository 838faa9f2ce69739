# -*- coding: utf-8 -*-
"""
Markup normalization pipeline for pasted rich text.

Classifies the content, then runs a fixed sequence of rewrite stages:
1. Vendor Strip - Office export cleanup (only for vendor markup)
2. Heading Detect - "H2: Title" prefixes become heading tags
3. List Detect - Bullet paragraphs become <ul> lists
4. Attribute Strip - Drop every attribute except an anchor's href
5. Tag Restrict - Reduce markup to the semantic vocabulary
6. Block Formatting - Line breaks after headings, paragraphs and lists
7. Whitespace Normalize - Special Unicode spaces and zero-width characters
"""
import logging
from dataclasses import dataclass, field
from typing import Any

from bs4 import BeautifulSoup

from .attributes import (
    count_href_anchors,
    restrict_to_allowed_tags,
    strip_unwanted_attributes,
)
from .classifier import Classification, classify, count_anchors
from .formatting import format_block_elements, normalize_whitespace
from .structure import convert_bullet_paragraphs, wrap_heading_prefixes
from .vendor import strip_vendor_markup

logger = logging.getLogger(__name__)

# Elements that end a line in the plain-text rendering
TEXT_BLOCK_TAGS = [
    "p",
    "div",
    "li",
    "tr",
    "pre",
    "blockquote",
    "h1",
    "h2",
    "h3",
    "h4",
    "h5",
    "h6",
]

# Elements whose text never belongs to the pasted content
TEXT_SKIPPED_TAGS = ["head", "title", "style", "script", "meta", "link"]


class PipelineFault(Exception):
    """Unexpected failure while classifying or normalizing markup."""

    pass


@dataclass
class PipelineResult:
    """Result of running one paste through the pipeline."""

    html: str
    classification: Classification | None = None
    success: bool = True
    error: str | None = None
    steps_applied: list[str] = field(default_factory=list)
    anchors_in: int = 0
    anchors_out: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)


def html_to_text(html: str) -> str:
    """
    Render markup as plain text, one line per block element.

    Used for code copied out of an editor, where the markup only carries
    highlighting and the text itself is what should be pasted.
    """
    soup = BeautifulSoup(html, "lxml")

    for element in soup.find_all(TEXT_SKIPPED_TAGS):
        # Nested matches go with their ancestor
        if element.decomposed:
            continue
        element.decompose()

    for br in soup.find_all("br"):
        br.replace_with("\n")

    # Innermost blocks first so wrappers see the newline their children added
    for block in reversed(soup.find_all(TEXT_BLOCK_TAGS)):
        if not block.get_text().endswith("\n"):
            block.append("\n")

    text = soup.get_text()
    return text.replace("\u00a0", " ").rstrip("\n")


class MarkupPipeline:
    """
    Classify-then-normalize pipeline.

    Stateless between calls; ``style_threshold`` overrides the configured
    vendor-styling heuristic.
    """

    def __init__(self, style_threshold: int | None = None):
        self.style_threshold = style_threshold

    def classify(self, content: str) -> Classification:
        """Pick the processing path, in decision-policy order."""
        return classify(content, self.style_threshold)

    def process(self, raw: str) -> PipelineResult:
        """
        Run one paste through the pipeline.

        Never raises: a failure comes back as ``success=False`` with the raw
        content as ``html`` so the caller can still insert something.
        """
        try:
            return self._run(raw)
        except Exception as e:
            logger.error(f"Markup pipeline failed: {e}", exc_info=True)
            return PipelineResult(html=raw, success=False, error=str(e))

    def _run(self, raw: str) -> PipelineResult:
        classification = self.classify(raw)
        result = PipelineResult(html=raw, classification=classification)
        logger.debug("Content classified", extra={"classification": classification.value})

        if classification.is_passthrough:
            return result

        if classification is Classification.CODE_SNIPPET:
            result.html = html_to_text(raw)
            result.steps_applied.append("code_snippet_text")
            return result

        result.anchors_in, hrefs_in = count_anchors(raw)
        logger.debug(
            "Anchors found in pasted content",
            extra={"anchors": result.anchors_in, "hrefs": hrefs_in},
        )

        current = raw

        # Step 1: Vendor Strip (vendor markup only)
        if classification is Classification.NEEDS_VENDOR_CLEANUP:
            current = strip_vendor_markup(current)
            result.steps_applied.append("vendor_strip")

        # Step 2: Heading Detect
        current = wrap_heading_prefixes(current)
        result.steps_applied.append("heading_detect")

        # Step 3: List Detect
        current = convert_bullet_paragraphs(current)
        result.steps_applied.append("list_detect")

        # Step 4: Attribute Strip
        current = strip_unwanted_attributes(current)
        result.steps_applied.append("attribute_strip")

        # Step 5: Tag Restrict
        current = restrict_to_allowed_tags(current)
        result.steps_applied.append("tag_restrict")

        # Anchor count check
        result.anchors_out = count_href_anchors(current)
        if result.anchors_out < hrefs_in:
            logger.warning(
                "Some links were lost during cleaning",
                extra={"hrefs_in": hrefs_in, "anchors_out": result.anchors_out},
            )
        else:
            logger.debug("Anchor links preserved", extra={"anchors_out": result.anchors_out})

        # Step 6: Block Formatting
        current = format_block_elements(current)
        result.steps_applied.append("block_formatting")

        # Step 7: Whitespace Normalize
        current = normalize_whitespace(current)
        result.steps_applied.append("whitespace_normalize")

        result.html = current
        result.metadata = {"input_length": len(raw), "output_length": len(current)}
        logger.info(
            "Markup normalized",
            extra={
                "classification": classification.value,
                "input_length": len(raw),
                "output_length": len(current),
            },
        )
        return result


# Global pipeline instance
content_pipeline = MarkupPipeline()


def normalize_markup(raw: str) -> str:
    """
    Normalize pasted content to clean semantic markup.

    Raises:
        PipelineFault: if classification or normalization failed.
    """
    result = content_pipeline.process(raw)
    if not result.success:
        raise PipelineFault(result.error)
    return result.html
