# -*- coding: utf-8 -*-
"""
Structural rewrites for conventions that authors type as plain text.

- Heading prefixes: "H2: Title" or "H2 Tag: Title" becomes <h2>Title</h2>
- Bullet paragraphs: consecutive <p>- item</p> become one <ul> list
"""
import logging
import re

from .vocabulary import BULLET_GLYPHS

logger = logging.getLogger(__name__)

# Level digit, optional Title/Tag qualifier, colon
_PREFIX = r"H([1-4])(?:\s+(?:Title|Tag))?\s*:\s*"
_EMPHASIS = r"(?:strong|em|b|i|u)"

# <p><strong>H2 Tag: Title text</strong></p>
_EMPHASIS_WRAPPED = re.compile(
    rf"<p>\s*<({_EMPHASIS})>\s*{_PREFIX}([^<]+)</\1>\s*</p>", re.IGNORECASE
)
# <p>H2: Title text</p>
_PARAGRAPH_WRAPPED = re.compile(rf"<p>\s*{_PREFIX}([^<]+)</p>", re.IGNORECASE)
# <p><h3></h3><strong>Title</strong></p>
_EMPTY_HEADING_THEN_EMPHASIS = re.compile(
    rf"<p>\s*<h([1-4])>\s*</h\1>\s*<{_EMPHASIS}>([^<]+)</{_EMPHASIS}>\s*</p>",
    re.IGNORECASE,
)
# <p><h2>Title</h2></p>
_HEADING_IN_PARAGRAPH = re.compile(
    r"<p>\s*(<h([1-6])>[^<]*</h\2>)\s*</p>", re.IGNORECASE
)
# H2: Title text (bare line)
_BARE_LINE = re.compile(
    rf"^{_PREFIX}(.+)$", re.IGNORECASE | re.MULTILINE
)

_GLYPHS = "|".join(re.escape(glyph) for glyph in BULLET_GLYPHS)
# Item text stays inside its own paragraph and starts with a visible character
_BULLET_PARAGRAPH = re.compile(
    rf"<p>\s*(?:{_GLYPHS})\s*((?:(?!</p>)\S)(?:(?!</p>).)*?)</p>\s*", re.IGNORECASE
)

# Private-use code points marking bullet items between the two passes
_ITEM_START = "\ue000"
_ITEM_END = "\ue001"
_ITEM = re.compile(f"{_ITEM_START}([^{_ITEM_END}]+){_ITEM_END}")
_ITEM_RUN = re.compile(f"(?:{_ITEM_START}[^{_ITEM_END}]+{_ITEM_END})+")


def _heading(level: str, text: str) -> str:
    return f"<h{level}>{text.strip()}</h{level}>"


def wrap_heading_prefixes(html: str) -> str:
    """
    Turn textual heading prefixes (H1: to H4:) into heading tags.

    Patterns are tried in a fixed order; an emphasis tag wrapping the whole
    line is dropped, and headings redundantly wrapped in <p> are unwrapped.
    """
    result = _EMPHASIS_WRAPPED.sub(lambda m: _heading(m.group(2), m.group(3)), html)
    result = _PARAGRAPH_WRAPPED.sub(lambda m: _heading(m.group(1), m.group(2)), result)
    result = _EMPTY_HEADING_THEN_EMPHASIS.sub(
        lambda m: _heading(m.group(1), m.group(2)), result
    )
    result = _HEADING_IN_PARAGRAPH.sub(r"\1", result)
    result = _BARE_LINE.sub(lambda m: _heading(m.group(1), m.group(2)), result)

    if result != html:
        logger.debug("Wrapped heading prefixes")
    return result


def convert_bullet_paragraphs(html: str) -> str:
    """
    Fuse consecutive bullet paragraphs into a single <ul>.

    Items stay on one line; no newlines are introduced.
    """
    marked = _BULLET_PARAGRAPH.sub(
        lambda m: f"{_ITEM_START}{m.group(1)}{_ITEM_END}", html
    )
    if marked == html:
        return html

    def _to_list(match: re.Match) -> str:
        items = "".join(
            f"<li>{item.strip()}</li>" for item in _ITEM.findall(match.group(0))
        )
        return f"<ul>{items}</ul>"

    result = _ITEM_RUN.sub(_to_list, marked)
    logger.debug("Converted bullet paragraphs to lists")
    return result


def has_textual_structure(html: str) -> bool:
    """True when a heading prefix or bullet paragraph is waiting to be converted."""
    return any(
        pattern.search(html)
        for pattern in (
            _EMPHASIS_WRAPPED,
            _PARAGRAPH_WRAPPED,
            _EMPTY_HEADING_THEN_EMPHASIS,
            _HEADING_IN_PARAGRAPH,
            _BARE_LINE,
            _BULLET_PARAGRAPH,
        )
    )
