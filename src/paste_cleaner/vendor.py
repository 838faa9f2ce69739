# -*- coding: utf-8 -*-
"""
Word processor / office export stripping.

Reduces a full vendor export (conditional comments, namespaced tags,
style/script/xml blocks, layout wrappers) to body-level semantic markup.
Each rewrite feeds the next, so the order below matters.
"""
import logging
import re

from .attributes import canonicalize_anchors
from .vocabulary import (
    COLLAPSIBLE_TAGS,
    INLINE_TAGS,
    SPECIAL_SPACES,
    STRUCTURAL_TAGS,
    VENDOR_NAMESPACES,
    ZERO_WIDTH_CHARS,
)

logger = logging.getLogger(__name__)

_BODY = re.compile(r"<body[^>]*>([\s\S]*?)</body>", re.IGNORECASE)

_CONDITIONAL_COMMENT = re.compile(r"<!--\[if[^\]]*\]>[\s\S]*?<!\[endif\]-->", re.IGNORECASE)
_CONDITIONAL_OPEN = re.compile(r"<!\[if[^\]]*\]>", re.IGNORECASE)
_CONDITIONAL_CLOSE = re.compile(r"<!\[endif\]>", re.IGNORECASE)
_BLOCKS = re.compile(r"<(style|script|xml)[^>]*>[\s\S]*?</\1>", re.IGNORECASE)
_NAMESPACED_TAG = re.compile(
    r"</?(?:{}):[^>]*>".format("|".join(VENDOR_NAMESPACES)), re.IGNORECASE
)
_COMMENT = re.compile(r"<!--[\s\S]*?-->")
_META_OR_LINK = re.compile(r"</?(?:meta|link)[^>]*>", re.IGNORECASE)
_CONTAINER = re.compile(r"</?(?:div|span|font)(?:\s[^>]*)?>", re.IGNORECASE)
_BOLD = re.compile(r"<b(\s[^>]*)?>([\s\S]*?)</b>", re.IGNORECASE)
_ITALIC = re.compile(r"<i(\s[^>]*)?>([\s\S]*?)</i>", re.IGNORECASE)
_STRUCTURAL_WITH_ATTRIBUTES = re.compile(
    r"<({})\s+[^>]*?>".format("|".join(STRUCTURAL_TAGS)), re.IGNORECASE
)
_EMPTY_ELEMENT = re.compile(
    r"<({})>\s*</\1>".format("|".join(COLLAPSIBLE_TAGS)), re.IGNORECASE
)
_SPECIAL_SPACE = re.compile("[{}]".format("".join(SPECIAL_SPACES)))
_ZERO_WIDTH = re.compile("[{}]".format("".join(ZERO_WIDTH_CHARS)))
_INLINE_CLOSE = re.compile(r"</({})>".format("|".join(INLINE_TAGS)), re.IGNORECASE)
_BLOCK_CLOSE_SPACE = re.compile(r"\s+(</(?:p|h[1-6]|li)>)", re.IGNORECASE)

# Passes needed to clear nested empties left behind by earlier removals
EMPTY_COLLAPSE_PASSES = 3


def extract_body(html: str) -> str:
    """Return the content of <body>, or the whole string when there is none."""
    match = _BODY.search(html)
    return match.group(1) if match else html


def strip_vendor_markup(html: str) -> str:
    """
    Clean word processor HTML down to semantic markup.

    Best effort: any failure is logged and the input returned unchanged.
    """
    try:
        content = extract_body(html)

        # Conditional comments and their bracket-only variants
        content = _CONDITIONAL_COMMENT.sub("", content)
        content = _CONDITIONAL_OPEN.sub("", content)
        content = _CONDITIONAL_CLOSE.sub("", content)

        # Style, script and xml blocks with their content
        content = _BLOCKS.sub("", content)

        # Namespaced tags (w:, o:, v:, m:)
        content = _NAMESPACED_TAG.sub("", content)

        # Comments (including StartFragment/EndFragment), meta and link
        content = _COMMENT.sub("", content)
        content = _META_OR_LINK.sub("", content)

        # Layout wrappers go, their content stays
        content = _CONTAINER.sub("", content)

        content = _BOLD.sub(r"<strong>\2</strong>", content)
        content = _ITALIC.sub(r"<em>\2</em>", content)

        content = _STRUCTURAL_WITH_ATTRIBUTES.sub(
            lambda m: f"<{m.group(1).lower()}>", content
        )
        content = canonicalize_anchors(content)

        content = content.replace("&nbsp;", " ")
        content = _SPECIAL_SPACE.sub(" ", content)
        content = _ZERO_WIDTH.sub("", content)

        for _ in range(EMPTY_COLLAPSE_PASSES):
            content = _EMPTY_ELEMENT.sub("", content)

        # Structure is rebuilt by the block formatter, not kept from the source
        content = re.sub(r"[ \t]+", " ", content)
        content = re.sub(r"[\r\n]+", " ", content)
        content = _INLINE_CLOSE.sub(lambda m: f"</{m.group(1)}> ", content)
        content = re.sub(r"\s+([.,;:!?])", r"\1", content)
        content = _BLOCK_CLOSE_SPACE.sub(r"\1", content)
        content = re.sub(r"  +", " ", content)
        content = content.strip()

        logger.debug(
            "Vendor markup stripped",
            extra={"input_length": len(html), "output_length": len(content)},
        )
        return content

    except Exception as e:
        logger.warning(f"Vendor markup stripping failed: {e}")
        return html
