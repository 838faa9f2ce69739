# -*- coding: utf-8 -*-
"""
Paste cleaning service configuration using Pydantic BaseSettings.
"""
from pathlib import Path
from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central service configuration loaded from environment variables.
    Values can also be provided through a .env file.
    """

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 8002

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"

    # ==========================================================================
    # Classification
    # ==========================================================================

    # A full HTML document with more than this many style="..." or class="..."
    # attributes is treated as vendor output even without vendor fingerprints
    VENDOR_STYLE_THRESHOLD: int = 5

    # ==========================================================================
    # Paste behaviour
    # ==========================================================================

    # Initial state of the enable/disable toggle
    PASTE_ENABLED_BY_DEFAULT: bool = False

    # Target documents that receive cleaned HTML (others get plain text)
    SUPPORTED_LANGUAGES: List[str] = ["html", "plaintext"]
    SUPPORTED_EXTENSIONS: List[str] = [".html", ".txt"]

    # Largest payload accepted by the HTTP API (bytes)
    MAX_CONTENT_SIZE: int = 5 * 1024 * 1024

    # ==========================================================================
    # Clipboard
    # ==========================================================================

    # Seconds before a clipboard helper command (osascript, textutil, xclip) is killed
    CLIPBOARD_TIMEOUT: float = 5.0
    CLIPBOARD_READ_ATTEMPTS: int = 2

    # ==========================================================================
    # Diagnostics
    # ==========================================================================

    # Persist raw and cleaned vendor HTML for debugging
    ENABLE_DIAGNOSTICS: bool = False
    DIAGNOSTICS_DIR: Path = Path("/tmp/paste-cleaner")

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False

    # Request tracking
    REQUEST_ID_HEADER: str = "X-Request-ID"

    # Compression
    GZIP_MIN_SIZE: int = 1000

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


# Global configuration instance
settings = Settings()
