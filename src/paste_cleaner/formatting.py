# -*- coding: utf-8 -*-
"""
Final layout passes: block line breaks and whitespace normalization.
"""
import logging
import re

from .vocabulary import SPECIAL_SPACES, ZERO_WIDTH_CHARS

logger = logging.getLogger(__name__)

_BLOCK_END = re.compile(r"</(?:h[1-6]|p|ul|ol)>", re.IGNORECASE)
_SPECIAL_SPACE = re.compile("[{}]".format("".join(SPECIAL_SPACES)))
_ZERO_WIDTH = re.compile("[{}]".format("".join(ZERO_WIDTH_CHARS)))
_ENTITY_SPACE = re.compile(r"&nbsp;|&#160;|&#x0*a0;", re.IGNORECASE)


def format_block_elements(html: str) -> str:
    """
    Put a line break after closing headings, paragraphs and lists.

    List items and inline elements stay on their sibling's line.
    """
    result = _BLOCK_END.sub(lambda m: m.group(0) + "\n", html)
    # One break per boundary, no indentation carried over from the source
    result = re.sub(r"[ \t]*\n\s*", "\n", result)
    return result.strip()


def normalize_whitespace(html: str) -> str:
    """
    Replace special spaces (entities included) with a plain space, drop
    zero-width characters and collapse runs of spaces.
    """
    result = _ENTITY_SPACE.sub(" ", html)
    result = _SPECIAL_SPACE.sub(" ", result)
    result = _ZERO_WIDTH.sub("", result)
    result = re.sub(r" {2,}", " ", result)

    if result != html:
        logger.debug(
            "Normalized special whitespace",
            extra={"nbsp_count": html.count("\u00a0")},
        )
    return result
