# -*- coding: utf-8 -*-
"""
Content classifiers deciding which path a paste takes.

None of these parse the markup: they look for literal fingerprints and
scan tag names with regular expressions.
"""
import logging
import re
from enum import Enum

from .attributes import extract_href
from .config import settings
from .structure import has_textual_structure
from .vocabulary import (
    ALLOWED_TAGS,
    CODE_EDITOR_MARKERS,
    DIRTY_MARKERS,
    SPECIAL_SPACES,
    VENDOR_MARKERS,
    ZERO_WIDTH_CHARS,
)

logger = logging.getLogger(__name__)

_TAG_PATTERN = re.compile(r"</?([a-z][a-z0-9]*)([^>]*)>", re.IGNORECASE)
_ANCHOR_PATTERN = re.compile(r"<a\s+([^>]*)>", re.IGNORECASE)
_CLEAN_ANCHOR_ATTRIBUTES = re.compile(r'^href="[^"]*"$')
_STYLE_ATTRIBUTE = re.compile(r'style="[^"]*"')
_CLASS_ATTRIBUTE = re.compile(r'class="[^"]*"')
_ANY_ANCHOR = re.compile(r"<a(\s[^>]*)?>", re.IGNORECASE)
_ENTITY_SPACE = re.compile(r"&nbsp;|&#160;|&#x0*a0;", re.IGNORECASE)


class Classification(str, Enum):
    """Outcome of classifying one paste."""

    NOT_MARKUP = "not_markup"
    CODE_SNIPPET = "code_snippet"
    ALREADY_CLEAN = "already_clean"
    NEEDS_VENDOR_CLEANUP = "needs_vendor_cleanup"
    NEEDS_CLEANING = "needs_cleaning"

    @property
    def is_passthrough(self) -> bool:
        """True when content is inserted without running the rewrite stages."""
        return self in (Classification.NOT_MARKUP, Classification.ALREADY_CLEAN)


def is_markup(content: str) -> bool:
    """Content counts as markup when it has both angle brackets."""
    return "<" in content and ">" in content


def is_code_editor_export(content: str) -> bool:
    """
    Detect syntax-highlighted code copied from a code editor.

    Editors wrap the copied code in styled divs and HTML-encode it, so the
    angle brackets of the code itself show up as entities.
    """
    if "&lt;" not in content or "&gt;" not in content:
        return False
    return any(marker in content for marker in CODE_EDITOR_MARKERS)


def is_already_clean(content: str) -> bool:
    """
    Check whether markup already uses only the semantic vocabulary.

    Content is dirty if it contains any dirty marker, any tag outside
    ALLOWED_TAGS, a non-anchor tag carrying attributes, or an anchor
    carrying anything but a double-quoted href.
    """
    for marker in DIRTY_MARKERS:
        if marker in content:
            logger.debug("Found dirty marker", extra={"marker": marker})
            return False

    for match in _TAG_PATTERN.finditer(content):
        tag_name = match.group(1).lower()
        if tag_name not in ALLOWED_TAGS:
            logger.debug("Found non-semantic tag", extra={"tag": tag_name})
            return False
        # A self-closing slash is not an attribute
        attributes = match.group(2).strip().rstrip("/").strip()
        if tag_name != "a" and attributes:
            logger.debug(
                "Found attributes on non-anchor tag",
                extra={"tag": tag_name, "attributes": attributes[:80]},
            )
            return False

    for match in _ANCHOR_PATTERN.finditer(content):
        attributes = match.group(1).strip()
        if not _CLEAN_ANCHOR_ATTRIBUTES.match(attributes):
            logger.debug("Found anchor with non-href attributes", extra={"attributes": attributes[:80]})
            return False

    return True


def needs_vendor_cleanup(content: str, style_threshold: int | None = None) -> bool:
    """
    Check for word processor / office fingerprints.

    A full HTML document without explicit fingerprints still qualifies when
    it carries more than ``style_threshold`` inline style or class attributes.
    """
    for marker in VENDOR_MARKERS:
        if marker in content:
            logger.debug("Found vendor marker", extra={"marker": marker})
            return True

    if "<html" in content and "<head" in content and "<body" in content:
        threshold = settings.VENDOR_STYLE_THRESHOLD if style_threshold is None else style_threshold
        style_count = len(_STYLE_ATTRIBUTE.findall(content))
        class_count = len(_CLASS_ATTRIBUTE.findall(content))
        if style_count > threshold or class_count > threshold:
            logger.debug(
                "Found excessive styling in full document",
                extra={"style_count": style_count, "class_count": class_count},
            )
            return True

    return False


def has_pending_rewrites(content: str) -> bool:
    """
    True when allow-listed markup still holds something a stage would change.

    That covers heading prefixes, bullet paragraphs, non-breaking space
    entities, special Unicode spaces and zero-width characters.
    """
    if has_textual_structure(content) or _ENTITY_SPACE.search(content):
        return True
    return any(char in content for char in SPECIAL_SPACES + ZERO_WIDTH_CHARS)


def classify(content: str, style_threshold: int | None = None) -> Classification:
    """Pick the processing path for one paste, in decision-policy order."""
    if not is_markup(content):
        return Classification.NOT_MARKUP
    if is_code_editor_export(content):
        return Classification.CODE_SNIPPET
    if is_already_clean(content) and not has_pending_rewrites(content):
        return Classification.ALREADY_CLEAN
    if needs_vendor_cleanup(content, style_threshold):
        return Classification.NEEDS_VENDOR_CLEANUP
    return Classification.NEEDS_CLEANING


def count_anchors(content: str) -> tuple[int, int]:
    """Return (anchor tag count, anchors with a recoverable href)."""
    anchors = list(_ANY_ANCHOR.finditer(content))
    with_href = sum(1 for match in anchors if extract_href(match.group(1) or "") is not None)
    return len(anchors), with_href
