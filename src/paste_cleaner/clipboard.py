# -*- coding: utf-8 -*-
"""
Clipboard access through the platform's command-line helpers.

macOS:
- HTML flavour via osascript (hex-encoded «data HTML…» payload)
- RTF flavour via osascript, converted to HTML with textutil
- Plain text via pbpaste

Linux:
- HTML and plain text via xclip
"""
import asyncio
import logging
import re
import sys
from dataclasses import dataclass
from typing import Literal

from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from .config import settings

logger = logging.getLogger(__name__)

_OSASCRIPT_DATA = re.compile(r"«data (.{4})([0-9A-Fa-f]*)»", re.DOTALL)


class SourceUnavailable(Exception):
    """The clipboard produced nothing usable."""

    pass


class ClipboardCommandError(Exception):
    """A clipboard helper command failed."""

    pass


class ClipboardTimeoutError(ClipboardCommandError):
    """A clipboard helper command did not answer in time (retryable)."""

    pass


@dataclass
class ClipboardContent:
    """Content read from the clipboard."""

    html: str | None = None
    plain_text: str = ""
    source: Literal["html", "rtf", "text"] = "text"

    @property
    def best(self) -> str:
        """Rich markup when available, plain text otherwise."""
        return self.html if self.html else self.plain_text


def decode_osascript_hex(output: str) -> str | None:
    """
    Decode osascript's ``«data HTML3C68746D6C3E»`` representation.

    Returns None when the output does not carry a data payload.
    """
    match = _OSASCRIPT_DATA.search(output)
    if not match or not match.group(2):
        return None
    try:
        return bytes.fromhex(match.group(2)).decode("utf-8", errors="replace")
    except ValueError:
        return None


class ClipboardReader:
    """Read rich and plain clipboard content for the current platform."""

    def __init__(self, platform: str | None = None, timeout: float | None = None):
        self.platform = platform or sys.platform
        self.timeout = settings.CLIPBOARD_TIMEOUT if timeout is None else timeout

    async def read(self) -> ClipboardContent:
        """
        Read the clipboard, preferring HTML, then RTF converted to HTML.

        Raises:
            SourceUnavailable: if neither markup nor text could be read.
        """
        if self.platform == "darwin":
            content = await self._read_macos()
        elif self.platform.startswith("linux"):
            content = await self._read_linux()
        else:
            raise SourceUnavailable(f"Clipboard access not supported on {self.platform}")

        if not content.html and not content.plain_text.strip():
            raise SourceUnavailable("Clipboard is empty")

        logger.debug(
            "Clipboard read",
            extra={
                "source": content.source,
                "html_length": len(content.html or ""),
                "text_length": len(content.plain_text),
            },
        )
        return content

    async def _read_macos(self) -> ClipboardContent:
        plain_text = await self._read_text(["pbpaste"])

        try:
            info = (await self._run(["osascript", "-e", "clipboard info"])).decode(
                "utf-8", errors="replace"
            )
        except (ClipboardCommandError, OSError) as e:
            logger.debug(f"Clipboard info unavailable: {e}")
            return ClipboardContent(plain_text=plain_text)

        html = await self._read_osascript_flavour("HTML")
        if html and html.strip():
            return ClipboardContent(html=html, plain_text=plain_text, source="html")

        if "RTF" in info:
            rtf = await self._read_osascript_flavour("RTF ")
            if rtf and rtf.strip():
                html = await self._convert_rtf(rtf)
                if html and html.strip():
                    return ClipboardContent(html=html, plain_text=plain_text, source="rtf")

        return ClipboardContent(plain_text=plain_text)

    async def _read_linux(self) -> ClipboardContent:
        plain_text = await self._read_text(["xclip", "-selection", "clipboard", "-o"])
        try:
            html = (
                await self._run(["xclip", "-selection", "clipboard", "-t", "text/html", "-o"])
            ).decode("utf-8", errors="replace")
        except (ClipboardCommandError, OSError) as e:
            logger.debug(f"No HTML flavour on clipboard: {e}")
            html = ""

        if html.strip():
            return ClipboardContent(html=html, plain_text=plain_text, source="html")
        return ClipboardContent(plain_text=plain_text)

    async def _read_osascript_flavour(self, class_code: str) -> str | None:
        try:
            output = await self._run(
                ["osascript", "-e", f"the clipboard as «class {class_code}»"]
            )
        except (ClipboardCommandError, OSError) as e:
            logger.debug(f"Clipboard flavour {class_code.strip()} unavailable: {e}")
            return None
        return decode_osascript_hex(output.decode("utf-8", errors="replace"))

    async def _convert_rtf(self, rtf: str) -> str | None:
        try:
            output = await self._run(
                ["textutil", "-convert", "html", "-format", "rtf", "-stdin", "-stdout"],
                input_bytes=rtf.encode("utf-8"),
            )
        except (ClipboardCommandError, OSError) as e:
            logger.warning(f"RTF conversion failed: {e}")
            return None
        return output.decode("utf-8", errors="replace")

    async def _read_text(self, args: list[str]) -> str:
        try:
            return (await self._run(args)).decode("utf-8", errors="replace")
        except (ClipboardCommandError, OSError) as e:
            logger.debug(f"Plain text unavailable: {e}")
            return ""

    async def _run(self, args: list[str], input_bytes: bytes | None = None) -> bytes:
        """Run a helper command, retrying when it times out."""

        @retry(
            retry=retry_if_exception_type(ClipboardTimeoutError),
            stop=stop_after_attempt(settings.CLIPBOARD_READ_ATTEMPTS),
            wait=wait_fixed(0.1),
            reraise=True,
        )
        async def _inner() -> bytes:
            return await self._exec(args, input_bytes)

        return await _inner()

    async def _exec(self, args: list[str], input_bytes: bytes | None = None) -> bytes:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdin=asyncio.subprocess.PIPE if input_bytes is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(input_bytes), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise ClipboardTimeoutError(f"{args[0]} timed out after {self.timeout}s")

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise ClipboardCommandError(f"{args[0]} exited with {process.returncode}: {message}")
        return stdout
