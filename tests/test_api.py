# -*- coding: utf-8 -*-
"""
Tests for the FastAPI API.
"""
from unittest.mock import AsyncMock, patch

from paste_cleaner.api import paste_controller
from paste_cleaner.clipboard import ClipboardContent, SourceUnavailable
from paste_cleaner.config import settings


class TestHealthEndpoint:
    """Tests for /health endpoint."""

    def test_health_returns_status(self, client):
        """Health endpoint should return status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data
        assert data["enabled"] is paste_controller.enabled


class TestCleanEndpoint:
    """Tests for /clean endpoint."""

    def test_clean_requires_content(self, client):
        """Clean endpoint should require content."""
        response = client.post("/clean", json={})
        assert response.status_code == 422

    def test_clean_forced(self, client, word_export, word_export_cleaned):
        """Should return normalized markup when forced."""
        response = client.post("/clean", json={"content": word_export, "force": True})

        assert response.status_code == 200
        data = response.json()
        assert data["output"] == word_export_cleaned
        assert data["classification"] == "needs_vendor_cleanup"
        assert data["cleaned"] is True
        assert data["steps_applied"][0] == "vendor_strip"
        assert data["content_length"] == len(word_export_cleaned)

    def test_clean_disabled(self, client, word_export):
        """Should return the plain text while the toggle is off."""
        paste_controller._enabled = False
        response = client.post(
            "/clean", json={"content": word_export, "plain_text": "Quarterly Results"}
        )

        assert response.status_code == 200
        assert response.json()["output"] == "Quarterly Results"

    def test_clean_unsupported_document(self, client):
        """Should return plain text for unsupported documents."""
        paste_controller._enabled = True
        response = client.post(
            "/clean",
            json={"content": '<p class="x">Hi</p>', "plain_text": "Hi", "language_id": "python"},
        )

        assert response.json()["output"] == "Hi"

    def test_clean_empty(self, client):
        """Should return a warning notice for empty content."""
        response = client.post("/clean", json={"content": "", "force": True})

        data = response.json()
        assert data["output"] == ""
        assert data["notice"] == "Clipboard is empty"
        assert data["notice_level"] == "warning"

    def test_clean_failure_falls_back(self, client):
        """Should fall back to plain text when the pipeline fails."""
        with patch(
            "paste_cleaner.pipeline.strip_unwanted_attributes",
            side_effect=RuntimeError("boom"),
        ):
            response = client.post(
                "/clean",
                json={"content": '<p class="x">Hi</p>', "plain_text": "Hi", "force": True},
            )

        assert response.status_code == 200
        data = response.json()
        assert data["output"] == "Hi"
        assert data["fallback"] is True
        assert data["notice"] == "Failed to paste as HTML: boom"
        assert data["notice_level"] == "error"

    def test_clean_too_large(self, client):
        """Should reject content over the size limit."""
        with patch.object(settings, "MAX_CONTENT_SIZE", 10):
            response = client.post("/clean", json={"content": "<p>" + "x" * 20 + "</p>"})

        assert response.status_code == 413


class TestClassifyEndpoint:
    """Tests for /classify endpoint."""

    def test_classify(self, client, word_export):
        """Should classify without transforming."""
        response = client.post("/classify", json={"content": word_export})

        assert response.status_code == 200
        data = response.json()
        assert data["classification"] == "needs_vendor_cleanup"
        assert data["anchors"] == 1
        assert data["hrefs"] == 1

    def test_classify_plain_text(self, client):
        """Should report plain text as not markup."""
        response = client.post("/classify", json={"content": "hello"})
        assert response.json()["classification"] == "not_markup"


class TestPasteEndpoint:
    """Tests for /paste endpoint."""

    def test_paste_cleans_clipboard(self, client):
        """Should read the clipboard and clean its HTML flavour."""
        paste_controller._enabled = True
        content = ClipboardContent(html='<p class="x">Hi</p>', plain_text="Hi", source="html")

        with patch.object(paste_controller, "reader") as mock_reader:
            mock_reader.read = AsyncMock(return_value=content)
            response = client.post("/paste", json={})

        assert response.status_code == 200
        assert response.json()["output"] == "<p>Hi</p>"

    def test_paste_empty_clipboard(self, client):
        """Should report an empty clipboard."""
        with patch.object(paste_controller, "reader") as mock_reader:
            mock_reader.read = AsyncMock(side_effect=SourceUnavailable("Clipboard is empty"))
            response = client.post("/paste", json={})

        data = response.json()
        assert data["output"] == ""
        assert data["notice_level"] == "warning"


class TestToggleEndpoints:
    """Tests for /toggle and /status endpoints."""

    def test_toggle_flips_state(self, client):
        """Toggle should flip the state and report the label."""
        paste_controller._enabled = False

        response = client.post("/toggle")
        assert response.status_code == 200
        assert response.json() == {"enabled": True, "label": "HTML Paste: enabled"}

        response = client.get("/status")
        assert response.json()["enabled"] is True

    def test_status(self, client):
        """Status should report the current state."""
        paste_controller._enabled = False
        response = client.get("/status")

        assert response.json() == {"enabled": False, "label": "HTML Paste: disabled"}


class TestMiddleware:
    """Tests for middleware."""

    def test_request_id_header(self, client):
        """Response should include request ID header."""
        response = client.get("/health")

        assert "x-request-id" in response.headers

    def test_request_id_generated(self, client):
        """Should generate a hex correlation id when none is sent."""
        response = client.get("/health")

        assert len(response.headers["x-request-id"]) == 32
        int(response.headers["x-request-id"], 16)

    def test_request_id_passthrough(self, client):
        """Should use provided request ID."""
        custom_id = "my-custom-request-id"
        response = client.get("/health", headers={"X-Request-ID": custom_id})

        assert response.headers.get("x-request-id") == custom_id

    def test_cors_headers(self, client):
        """Response should include CORS headers for OPTIONS."""
        response = client.options("/health", headers={"Origin": "http://localhost:3000"})

        assert response.status_code in [200, 204, 405]


class TestCompression:
    """Tests for GZip compression."""

    def test_gzip_large_response(self, client):
        """Large responses should be compressed."""
        content = "<p>" + "Lorem ipsum " * 1000 + "</p>"
        response = client.post(
            "/clean",
            json={"content": content, "force": True},
            headers={"Accept-Encoding": "gzip"},
        )

        assert response.status_code == 200
        assert response.headers.get("content-encoding") == "gzip"
