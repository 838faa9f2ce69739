# -*- coding: utf-8 -*-
"""
Static vocabulary shared by the classifiers and the rewrite stages.

These constants are the contract that clean output must satisfy: only
ALLOWED_TAGS may appear, and only anchors may carry an attribute (href).
"""

# Semantic tags permitted in clean output
ALLOWED_TAGS = frozenset(
    [
        "p",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "strong",
        "em",
        "u",
        "ul",
        "ol",
        "li",
        "a",
        "br",
        "blockquote",
        "pre",
        "code",
        "span",
        "div",
    ]
)

ALLOWED_ANCHOR_ATTRIBUTE = "href"

# Literal substrings that disqualify content from being "already clean"
DIRTY_MARKERS = [
    # Office markers
    "xmlns:w=",
    "xmlns:o=",
    "xmlns:m=",
    "<w:",
    "<o:",
    'class="Mso',
    "urn:schemas-microsoft-com",
    "StartFragment",
    "EndFragment",
    "/* Style Definitions */",
    # Full document scaffolding
    "<html",
    "<head",
    "<body",
    "<!DOCTYPE",
    # Presentation / tracking attributes
    "style=",
    "class=",
    "id=",
    "data-",
    # Metadata tags
    "<meta",
    "<link",
    "<style",
    "<script",
]

# Literal substrings that identify word processor / office exports
VENDOR_MARKERS = [
    'xmlns:w="urn:schemas-microsoft-com:office:word"',
    'xmlns:o="urn:schemas-microsoft-com:office:office"',
    'xmlns:m="http://schemas.microsoft.com/office',
    "<w:",
    "<o:",
    'class="Mso',
    "urn:schemas-microsoft-com",
    "StartFragment",
    "EndFragment",
    "<style>\n<!--",
    "/* Style Definitions */",
]

# Markers of syntax-highlighted code copied out of a code editor
CODE_EDITOR_MARKERS = [
    "cascadia code",
    "monospace",
    "<meta charset",
]

# Office XML namespace prefixes (w: word, o: office, v: vml, m: math)
VENDOR_NAMESPACES = ["w", "o", "v", "m"]

# Tags whose attributes are dropped wholesale during vendor stripping
STRUCTURAL_TAGS = [
    "p",
    "h[1-6]",
    "ul",
    "ol",
    "li",
    "strong",
    "em",
    "u",
    "br",
    "table",
    "thead",
    "tbody",
    "tr",
    "th",
    "td",
    "blockquote",
    "pre",
    "code",
]

# Tags removed when they enclose nothing but whitespace
COLLAPSIBLE_TAGS = ["p", "h[1-6]", "li", "strong", "em", "u", "th", "td"]

# Inline closing tags followed by a space so adjacent words do not merge
INLINE_TAGS = ["strong", "em", "u", "a"]

# Attributes removed by the allow-lister (regex fragments)
UNWANTED_ATTRIBUTES = [
    "data-[a-z0-9-]+",
    "class",
    "id",
    "style",
    "aria-[a-z0-9-]+",
    "role",
    "title",
    "rel",
    "target",
    "contenteditable",
    "spellcheck",
    "tabindex",
    "dir",
    "lang",
]

# Unicode whitespace variants rendered as a plain space
SPECIAL_SPACES = [
    "\u00a0",  # no-break space
    "\u2007",  # figure space
    "\u202f",  # narrow no-break space
    "\u2009",  # thin space
    "\u200a",  # hair space
    "\u2003",  # em space
    "\u2002",  # en space
]

# Invisible code points deleted outright
ZERO_WIDTH_CHARS = [
    "\ufeff",  # BOM / zero-width no-break space
    "\u200b",  # zero-width space
    "\u200c",  # zero-width non-joiner
    "\u200d",  # zero-width joiner
]

# Paragraph glyphs recognised as bullets
BULLET_GLYPHS = ["-", "•", "·"]
