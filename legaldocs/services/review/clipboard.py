"""Clipboard port used by the review surface to copy clause text."""

from typing import List, Optional, Protocol, runtime_checkable


@runtime_checkable
class Clipboard(Protocol):
    def write_text(self, text: str) -> None:
        """Write text to the clipboard, raising on failure."""
        ...


class InMemoryClipboard:
    """Clipboard that keeps written text in memory.

    Used by the HTTP layer, where there is no system clipboard, and by tests.
    Setting ``fail`` makes every write raise.
    """

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.history: List[str] = []

    @property
    def text(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def write_text(self, text: str) -> None:
        if self.fail:
            raise OSError("Clipboard is not available")
        self.history.append(text)
