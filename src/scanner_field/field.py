"""
ScannerField - converts scanner input in a text field and notifies listeners.

The field observes the change notifications of a host text widget. When the
classifier reports a completed scan, the text is converted and listeners are
notified. Both happen in a task deferred through the host, because replacing
the text from inside the notification that announced the last character would
re-enter the host's change dispatch.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, List, Optional

from .char_map import convert_input
from .classifier import DEFAULT_BARCODE_LENGTH, DEFAULT_INPUT_DELAY, InputClassifier, Verdict
from .events import BarcodeScanEvent

logger = logging.getLogger(__name__)


class TextHost(ABC):
    """Text widget capabilities a ScannerField drives."""

    @abstractmethod
    def get_text(self) -> str:
        pass

    @abstractmethod
    def set_text(self, text: str) -> None:
        pass

    @abstractmethod
    def defer(self, task: Callable[[], None]) -> None:
        """Run task once the current change notification has been dispatched"""
        pass


class ScannerField:
    """
    Scanner detection and conversion for one text field.

    The host forwards its change notifications to on_inserted, on_removed and
    on_other_change. Listeners receive a BarcodeScanEvent once per completed scan,
    after the text has been converted.
    """

    def __init__(self, host: TextHost, barcode_length: int = DEFAULT_BARCODE_LENGTH,
                 input_delay: int = DEFAULT_INPUT_DELAY,
                 clock: Optional[Callable[[], float]] = None):
        self.host = host
        self.classifier = InputClassifier(barcode_length, input_delay, clock=clock)
        self._listeners: List = []
        self._suppressed = False

    # Configuration

    def set_barcode_length(self, barcode_length: int) -> None:
        """Set how long the text must be when checking if it comes from a scanner"""
        self.classifier.set_barcode_length(barcode_length)

    def set_input_delay(self, input_delay: int) -> None:
        """Set the max milliseconds between the first and last scanned character"""
        self.classifier.set_input_delay(input_delay)

    @property
    def barcode_length(self) -> int:
        return self.classifier.barcode_length

    @property
    def input_delay(self) -> int:
        return self.classifier.input_delay

    # Listeners

    def add_listener(self, listener) -> None:
        """
        Register a listener.

        Args:
            listener: BarcodeScanListener, or a callable taking the event
        """
        self._listeners.append(listener)

    def remove_listener(self, listener) -> None:
        """Remove one registration of listener, matched by identity"""
        for index, registered in enumerate(self._listeners):
            if registered is listener:
                del self._listeners[index]
                return

    @property
    def listeners(self) -> List:
        return list(self._listeners)

    # Text access

    def get_text(self) -> str:
        return self.host.get_text()

    def set_text(self, text: str) -> None:
        self.host.set_text(text)

    # Host notifications

    def on_inserted(self, new_length: int) -> None:
        if self._suppressed:
            return
        if self.classifier.on_insert(new_length) is Verdict.COMPLETED:
            self.host.defer(self._complete_scan)

    def on_removed(self, new_length: int) -> None:
        if self._suppressed:
            return
        self.classifier.on_delete(new_length)

    def on_other_change(self) -> None:
        # Attribute-only changes do not affect the length of the text
        pass

    # Completion

    def _complete_scan(self) -> None:
        raw_text = self.host.get_text()
        converted = convert_input(raw_text)

        self._suppressed = True
        try:
            self.host.set_text(converted)
        finally:
            self._suppressed = False

        logger.info(f"Barcode scan completed: {converted}")
        self.fire_barcode_scan_completed()

    def fire_barcode_scan_completed(self) -> None:
        """Notify every registered listener, isolating listener failures"""
        event = BarcodeScanEvent(self)
        for listener in list(self._listeners):
            try:
                handler = getattr(listener, "barcode_scan_completed", None)
                if handler is not None:
                    handler(event)
                else:
                    listener(event)
            except Exception as e:
                logger.error(f"Barcode scan listener {listener!r} failed: {e}", exc_info=True)
