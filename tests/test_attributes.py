# -*- coding: utf-8 -*-
"""
Tests for attribute stripping and tag allow-listing.
"""
import re

import pytest

from paste_cleaner.attributes import (
    canonicalize_anchors,
    count_href_anchors,
    extract_href,
    restrict_to_allowed_tags,
    strip_unwanted_attributes,
    unwrap_anchors_without_href,
)
from paste_cleaner.vocabulary import ALLOWED_TAGS


class TestExtractHref:
    """Tests for the href grammar."""

    @pytest.mark.parametrize(
        "attributes,expected",
        [
            (' href="https://example.com/a"', "https://example.com/a"),
            (" href='https://example.com/b'", "https://example.com/b"),
            (" href=https://example.com/c?d=1&e=2", "https://example.com/c?d=1&e=2"),
            (' class="x" HREF = "upper"', "upper"),
            (' title="href=decoy" href="real"', "real"),
            (' href="first" href="second"', "first"),
        ],
    )
    def test_recoverable_href(self, attributes, expected):
        """Should read the first href in any quoting style."""
        assert extract_href(attributes) == expected

    @pytest.mark.parametrize("attributes", ["", ' name="top"', ' href=""', " data-href=x"])
    def test_unrecoverable_href(self, attributes):
        """Should return None when no usable href is present."""
        assert extract_href(attributes) is None

    def test_entities_are_not_decoded(self):
        """Should copy the value verbatim."""
        assert extract_href(' href="/q?a=1&amp;b=2"') == "/q?a=1&amp;b=2"


class TestCanonicalizeAnchors:
    """Tests for anchor canonicalisation."""

    def test_keeps_only_href(self):
        """Should reduce an anchor to its href."""
        html = "<a target=\"_blank\" href='https://e.com/x' title=\"t\">x</a>"
        assert canonicalize_anchors(html) == '<a href="https://e.com/x">x</a>'

    def test_quotes_unquoted_href(self):
        """Should double-quote an unquoted href."""
        html = "<a href=https://e.com/a?b=c>x</a>"
        assert canonicalize_anchors(html) == '<a href="https://e.com/a?b=c">x</a>'

    def test_escapes_embedded_double_quote(self):
        """Should escape a double quote carried by a single-quoted href."""
        html = "<a href='/say\"hi\"'>x</a>"
        assert canonicalize_anchors(html) == '<a href="/say&quot;hi&quot;">x</a>'

    def test_leaves_anchor_without_href(self):
        """Should not touch anchors without an href."""
        html = '<a name="top">x</a>'
        assert canonicalize_anchors(html) == html


class TestUnwrapAnchorsWithoutHref:
    """Tests for unwrapping unusable anchors."""

    def test_unwraps_named_anchor(self):
        """Should keep the text of an anchor without href."""
        html = '<a name="x">one</a><a href="u">two</a>'
        assert unwrap_anchors_without_href(html) == 'one<a href="u">two</a>'

    def test_drops_stray_close_tag(self):
        """Should drop a close tag with no open anchor."""
        assert unwrap_anchors_without_href("text</a>") == "text"

    def test_pairs_in_document_order(self):
        """Should pair close tags with the anchor they belong to."""
        html = '<a href="u">a</a> <a>b</a> <a href="v">c</a>'
        assert unwrap_anchors_without_href(html) == '<a href="u">a</a> b <a href="v">c</a>'


class TestStripUnwantedAttributes:
    """Tests for the attribute purge."""

    def test_removes_presentation_and_tracking(self):
        """Should drop data, id, class, style, aria and role attributes."""
        html = "<p data-pm-slice=\"1 1 []\" id=\"x\" class='c' style=\"a\" aria-label=\"l\" role=note>T</p>"
        assert strip_unwanted_attributes(html) == "<p>T</p>"

    def test_removes_meta_and_link(self):
        """Should drop meta and link tags."""
        html = '<meta charset="utf-8"><link rel="stylesheet" href="a.css"><p>T</p>'
        assert strip_unwanted_attributes(html) == "<p>T</p>"

    def test_preserves_href(self):
        """Should keep the href of an anchor whose other attributes are removed."""
        html = '<a class="btn" href="https://example.com/a?id=1" target="_blank" rel="noopener">x</a>'
        assert strip_unwanted_attributes(html) == '<a href="https://example.com/a?id=1">x</a>'

    def test_collapses_whitespace(self):
        """Should collapse whitespace runs left behind."""
        assert strip_unwanted_attributes("<p>a  \n b</p>") == "<p>a b</p>"


class TestRestrictToAllowedTags:
    """Tests for the tag allow-list."""

    def test_legacy_emphasis(self):
        """Should map b and i to strong and em."""
        assert restrict_to_allowed_tags("<B>x</B> <i>y</i>") == "<strong>x</strong> <em>y</em>"

    def test_table_rows_become_paragraphs(self):
        """Should turn rows into paragraphs and drop cells."""
        result = restrict_to_allowed_tags("<table><tr><td>a</td><td>b</td></tr></table>")
        assert "<p>" in result and "</p>" in result
        assert "<td" not in result and "<table" not in result
        assert "a" in result and "b" in result

    def test_drops_unknown_tags_keeping_text(self):
        """Should drop unknown tags but keep their content."""
        result = restrict_to_allowed_tags("<section><p>Hi <img src=\"a.png\"> <sup>2</sup></p></section>")
        assert result.strip().startswith("<p>Hi")
        assert "2" in result
        assert "<img" not in result and "<sup" not in result

    def test_drops_blocks_with_content(self):
        """Should remove style, script and title blocks entirely."""
        html = "<title>T</title><style>p{}</style><script>alert(1)</script><p>Body</p>"
        assert restrict_to_allowed_tags(html) == "<p>Body</p>"

    def test_drops_comments_and_declarations(self):
        """Should remove comments and doctype declarations."""
        html = "<!DOCTYPE html><!-- note --><p>Body</p>"
        assert restrict_to_allowed_tags(html) == "<p>Body</p>"

    def test_strips_attributes_of_allowed_tags(self):
        """Should strip leftover attributes from allowed tags."""
        assert restrict_to_allowed_tags('<p align="center">x</p>') == "<p>x</p>"

    def test_only_allowed_tags_remain(self):
        """Should leave nothing outside the vocabulary."""
        html = (
            '<div><font face="Arial"><p lang="en"><b>x</b></p></font>'
            '<a name="t">y</a><a href="u" onclick="go()">z</a></div>'
        )
        result = restrict_to_allowed_tags(html)
        for closing, name, attributes in re.findall(r"<(/?)([a-zA-Z0-9]+)([^>]*)>", result):
            assert name.lower() in ALLOWED_TAGS
            if name.lower() == "a" and not closing:
                assert re.fullmatch(r' href="[^"]*"', attributes)
            else:
                assert attributes == ""


class TestCountHrefAnchors:
    """Tests for canonical anchor counting."""

    def test_counts_canonical_anchors(self):
        """Should count anchors with an href."""
        assert count_href_anchors('<a href="x">1</a><a>2</a><a href="y">3</a>') == 2
