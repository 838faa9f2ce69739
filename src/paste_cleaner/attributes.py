# -*- coding: utf-8 -*-
"""
Attribute and tag allow-listing.

Only anchors may keep an attribute, and only href. Anchor hrefs follow a
fixed grammar: the first attribute named href (any case), optional
whitespace around "=", and a value that is double-quoted, single-quoted,
or an unquoted run without whitespace, quotes, "<", ">" or backtick.
Values are copied verbatim; entities are not decoded.
"""
import logging
import re

from .vocabulary import ALLOWED_TAGS, UNWANTED_ATTRIBUTES

logger = logging.getLogger(__name__)

# Attribute text of an open tag; quoted values may contain ">"
_ATTRS = r"""(?:"[^"]*"|'[^']*'|[^'">])*"""

_ANCHOR_OPEN = re.compile(rf"<a(\s{_ATTRS})?>", re.IGNORECASE)
_ANCHOR_TOKEN = re.compile(rf"<a(\s{_ATTRS})?>|</a\s*>", re.IGNORECASE)
_ATTRIBUTE = re.compile(
    r"""([^\s"'>/=]+)(?:\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'<>`]+)))?"""
)
_ANY_TAG = re.compile(rf"<(/?)([a-zA-Z][\w:-]*)({_ATTRS})>")

_META_OR_LINK = re.compile(r"</?(?:meta|link)\b[^>]*>", re.IGNORECASE)
_DROPPED_BLOCKS = re.compile(
    r"<(head|style|script|xml|template|title)\b[^>]*>[\s\S]*?</\1\s*>", re.IGNORECASE
)
_COMMENT = re.compile(r"<!--[\s\S]*?-->")
_DECLARATION = re.compile(r"<![^>]*>|<\?[^>]*\?>")

_LEGACY_EMPHASIS = {"b": "strong", "i": "em"}

# Dropped tags that separate their neighbours with a space
_SEPARATING_TAGS = frozenset(
    [
        "td",
        "th",
        "table",
        "thead",
        "tbody",
        "tfoot",
        "caption",
        "section",
        "article",
        "header",
        "footer",
        "main",
        "nav",
        "aside",
        "figure",
        "figcaption",
        "address",
        "dl",
        "dt",
        "dd",
        "hr",
        "img",
    ]
)


def extract_href(attributes: str) -> str | None:
    """Return the href value from an anchor's attribute text, or None."""
    for match in _ATTRIBUTE.finditer(attributes or ""):
        if match.group(1).lower() != "href":
            continue
        value = next((group for group in match.groups()[1:] if group is not None), None)
        return value or None
    return None


def _anchor(href: str) -> str:
    return '<a href="{}">'.format(href.replace('"', "&quot;"))


def canonicalize_anchors(html: str) -> str:
    """
    Rewrite every anchor carrying an href to exactly <a href="value">.

    Anchors without a recoverable href are left untouched.
    """

    def _rewrite(match: re.Match) -> str:
        href = extract_href(match.group(1))
        if href is None:
            return match.group(0)
        return _anchor(href)

    return _ANCHOR_OPEN.sub(_rewrite, html)


def unwrap_anchors_without_href(html: str) -> str:
    """
    Remove anchors that have no recoverable href, keeping their text.

    Close tags are paired with open tags by walking them in document order;
    stray close tags are dropped.
    """
    kept: list[bool] = []

    def _walk(match: re.Match) -> str:
        if match.group(0).startswith("</"):
            if not kept:
                return ""
            return "</a>" if kept.pop() else ""
        href = extract_href(match.group(1))
        kept.append(href is not None)
        return _anchor(href) if href is not None else ""

    return _ANCHOR_TOKEN.sub(_walk, html)


def strip_unwanted_attributes(html: str) -> str:
    """
    Remove presentation, tracking and behavioural attributes.

    Anchors are canonicalised before and after the purge so the href
    survives whatever the purge does to the rest of the tag.
    """
    result = _META_OR_LINK.sub("", html)
    result = canonicalize_anchors(result)

    for attribute in UNWANTED_ATTRIBUTES:
        result = re.sub(rf'\s+{attribute}="[^"]*"', "", result, flags=re.IGNORECASE)
        result = re.sub(rf"\s+{attribute}='[^']*'", "", result, flags=re.IGNORECASE)
        result = re.sub(rf"\s+{attribute}=[^\s>]*", "", result, flags=re.IGNORECASE)

    result = canonicalize_anchors(result)
    result = re.sub(r"\s{2,}", " ", result)

    if result != html:
        logger.debug("Stripped unwanted attributes")
    return result


def restrict_to_allowed_tags(html: str) -> str:
    """
    Reduce markup to the allowed tag vocabulary.

    Legacy b/i become strong/em, table rows become paragraphs, any other
    unknown tag is dropped with its content kept, and allowed tags lose
    all attributes except an anchor's href.
    """
    result = _DROPPED_BLOCKS.sub("", html)
    result = _COMMENT.sub("", result)
    result = _DECLARATION.sub("", result)

    def _filter(match: re.Match) -> str:
        closing, name = match.group(1), match.group(2).lower()
        if name == "a":
            return match.group(0)
        name = _LEGACY_EMPHASIS.get(name, name)
        if name == "tr":
            return f"<{closing}p>"
        if name in ALLOWED_TAGS:
            return f"<{closing}{name}>"
        return " " if name in _SEPARATING_TAGS else ""

    result = _ANY_TAG.sub(_filter, result)
    result = unwrap_anchors_without_href(result)

    if result != html:
        logger.debug("Restricted markup to allowed tags")
    return result


def count_href_anchors(html: str) -> int:
    """Number of anchors in canonical <a href="..."> form."""
    return len(re.findall(r"<a\s+href", html, flags=re.IGNORECASE))
