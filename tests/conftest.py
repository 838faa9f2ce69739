# -*- coding: utf-8 -*-
"""
Pytest configuration and fixtures.
"""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from paste_cleaner import api
from paste_cleaner.api import app
from paste_cleaner.diagnostics import DiagnosticsWriter

SAMPLES_DIR = Path(__file__).parent / "samples"

WORD_EXPORT = (SAMPLES_DIR / "word_export.html").read_text(encoding="utf-8")

WORD_EXPORT_CLEANED = (
    "<h2>Quarterly Results</h2>\n"
    '<p>Revenue grew by <em>ten</em> percent. See <a href="https://example.com/report">the report</a>.</p>\n'
    "<ul><li>Alpha</li><li>Beta</li></ul>"
)

CODE_EDITOR_EXPORT = (
    "<meta charset='utf-8'>"
    "<div style=\"color: #d4d4d4;background-color: #1e1e1e;"
    "font-family: 'Cascadia Code', Consolas, monospace;\">"
    '<div><span style="color: #808080;">&lt;</span><span style="color: #569cd6;">p</span>'
    '<span style="color: #808080;">&gt;</span>Hi<span>&lt;/</span><span>p</span><span>&gt;</span></div>'
    "<div><span>x = 1</span></div>"
    "</div>"
)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture(autouse=True)
def restore_paste_toggle():
    """Keep the process-wide toggle state from leaking between tests."""
    original = api.paste_controller._enabled
    yield
    api.paste_controller._enabled = original


@pytest.fixture
def word_export():
    """Word export with a heading prefix, a link, bullets and an empty paragraph."""
    return WORD_EXPORT


@pytest.fixture
def word_export_cleaned():
    """Expected normalization of ``word_export``."""
    return WORD_EXPORT_CLEANED


@pytest.fixture
def code_editor_export():
    """Syntax-highlighted snippet as copied out of a code editor."""
    return CODE_EDITOR_EXPORT


@pytest.fixture
def diagnostics(tmp_path):
    """Enabled diagnostics writer rooted in a temporary directory."""
    return DiagnosticsWriter(directory=tmp_path / "diagnostics", enabled=True)
