"""
In-memory text host, used for headless operation and simulated scans.
"""

import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from ..field import ScannerField, TextHost

logger = logging.getLogger(__name__)


class MemoryTextHost(TextHost):
    """
    Text buffer that notifies its observers of every change.

    Deferred tasks are queued and only run by run_pending(), which plays the
    part of the host event loop.
    """

    def __init__(self, text: str = ""):
        self._text = text
        self._observers: List = []
        self._pending: Deque[Callable[[], None]] = deque()

    def add_observer(self, observer) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # TextHost

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        """Replace the whole text, notified as a removal then an insertion"""
        if self._text:
            self._text = ""
            self._notify_removed()
        if text:
            self._text = text
            self._notify_inserted()

    def defer(self, task: Callable[[], None]) -> None:
        self._pending.append(task)

    # Editing

    def insert(self, chars: str, position: Optional[int] = None) -> None:
        """Insert chars at position, at the end when position is None"""
        if not chars:
            return
        if position is None:
            position = len(self._text)
        self._text = self._text[:position] + chars + self._text[position:]
        self._notify_inserted()

    def type_char(self, char: str) -> None:
        self.insert(char)

    def delete(self, count: int = 1, position: Optional[int] = None) -> None:
        """Delete count characters ending at position (backspace behaviour)"""
        if position is None:
            position = len(self._text)
        start = max(0, position - count)
        if start == position:
            return
        self._text = self._text[:start] + self._text[position:]
        self._notify_removed()

    def backspace(self) -> None:
        self.delete(1)

    def clear(self) -> None:
        self.set_text("")

    def change_attributes(self) -> None:
        for observer in list(self._observers):
            observer.on_other_change()

    # Event loop

    def has_pending(self) -> bool:
        return bool(self._pending)

    def run_pending(self) -> int:
        """Run deferred tasks, including those scheduled while running. Returns count run."""
        count = 0
        while self._pending:
            task = self._pending.popleft()
            task()
            count += 1
        return count

    def _notify_inserted(self) -> None:
        length = len(self._text)
        for observer in list(self._observers):
            observer.on_inserted(length)

    def _notify_removed(self) -> None:
        length = len(self._text)
        for observer in list(self._observers):
            observer.on_removed(length)


def create_memory_field(barcode_length: int = 8, input_delay: int = 50,
                        clock: Optional[Callable[[], float]] = None) -> ScannerField:
    """Create a ScannerField wired to a new MemoryTextHost (available as field.host)"""
    host = MemoryTextHost()
    field = ScannerField(host, barcode_length, input_delay, clock=clock)
    host.add_observer(field)
    return field
