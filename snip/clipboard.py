"""System clipboard access backed by pyperclip."""

from __future__ import annotations

import logging
from typing import Protocol

import pyperclip

from snip.errors import ClipboardError

logger = logging.getLogger(__name__)


class Clipboard(Protocol):
    def read(self) -> str: ...

    def write(self, text: str) -> None: ...


class SystemClipboard:
    def read(self) -> str:
        """Return the clipboard text, or an empty string when nothing is copied."""
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to read from clipboard: {exc}") from exc
        return content or ""

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Failed to write to clipboard: {exc}") from exc
        logger.debug("Copied text to clipboard", extra={"length": len(text)})


__all__ = ["Clipboard", "SystemClipboard"]
