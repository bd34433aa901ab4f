"""
Timing based classifier telling barcode scanner input apart from typing.

A run starts when the first character enters an empty field. The run is
treated as scanner input when its characters arrive one at a time, without
deletions, and the configured number of characters is reached within the
configured number of milliseconds after the first one.
"""

import enum
import logging
import time
from typing import Callable, Optional

from .validation import validate_barcode_length, validate_input_delay

logger = logging.getLogger(__name__)

DEFAULT_BARCODE_LENGTH = 8
DEFAULT_INPUT_DELAY = 50  # ms


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds"""
    return time.monotonic() * 1000.0


class Verdict(enum.Enum):
    CONTINUE = "continue"
    COMPLETED = "completed"


class InputClassifier:
    """Per-field state machine that decides when a run looks machine generated."""

    def __init__(self, barcode_length: int = DEFAULT_BARCODE_LENGTH,
                 input_delay: int = DEFAULT_INPUT_DELAY,
                 clock: Optional[Callable[[], float]] = None):
        """
        Args:
            barcode_length: Number of characters a scanned barcode contains
            input_delay: Max milliseconds between the first and last character
            clock: Callable returning the current time in milliseconds
        """
        self.barcode_length = validate_barcode_length(barcode_length)
        self.input_delay = validate_input_delay(input_delay)
        self.clock = clock or monotonic_ms

        self.reference_time: Optional[float] = None
        self.previous_length = 0
        self.still_valid = True

    def set_barcode_length(self, barcode_length: int) -> None:
        self.barcode_length = validate_barcode_length(barcode_length)

    def set_input_delay(self, input_delay: int) -> None:
        self.input_delay = validate_input_delay(input_delay)

    def on_insert(self, new_length: int) -> Verdict:
        """
        Review the run after text was inserted.

        Args:
            new_length: Length of the text after the insertion

        Returns:
            Verdict.COMPLETED when this insertion completes a scan, else Verdict.CONTINUE
        """
        # First character of a run always restarts it
        if new_length == 1:
            self.reference_time = self.clock()
            self.previous_length = 1
            self.still_valid = True
            logger.debug("Run started")
            if self.barcode_length == 1:
                return self._check_window()
            return Verdict.CONTINUE

        if not self.still_valid:
            return Verdict.CONTINUE

        # Pasted or programmatically set text never grows one char at a time
        if new_length != self.previous_length + 1:
            logger.debug(f"Run disqualified: length went from {self.previous_length} to {new_length}")
            self.still_valid = False
            self.previous_length = new_length
            return Verdict.CONTINUE

        self.previous_length = new_length
        if new_length == self.barcode_length:
            return self._check_window()
        return Verdict.CONTINUE

    def on_delete(self, new_length: int) -> None:
        """Any deletion disqualifies the run unless it empties the field."""
        self.still_valid = new_length == 0
        if self.still_valid:
            # Empty field, the next run starts from scratch
            self.previous_length = 0
            self.reference_time = None
        else:
            logger.debug(f"Run disqualified: deletion left {new_length} characters")

    def elapsed(self) -> float:
        """Milliseconds since the first character of the current run"""
        if self.reference_time is None:
            return 0.0
        return self.clock() - self.reference_time

    def _check_window(self) -> Verdict:
        elapsed = self.elapsed()
        if elapsed <= self.input_delay:
            logger.debug(f"Run completed: {self.barcode_length} chars in {elapsed:.1f} ms")
            return Verdict.COMPLETED
        logger.debug(f"Run too slow: {self.barcode_length} chars in {elapsed:.1f} ms "
                     f"(limit {self.input_delay} ms)")
        return Verdict.CONTINUE
