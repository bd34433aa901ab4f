"""
Completion event fired by a ScannerField and the listener interface to receive it.
"""

from abc import ABC, abstractmethod


class BarcodeScanEvent:
    """Event telling a scanner finished giving input into a field."""

    def __init__(self, source=None):
        self.source = source

    def get_source(self):
        """Return the ScannerField that fired the event"""
        return self.source

    def __repr__(self):
        return f"BarcodeScanEvent(source={self.source!r})"


class BarcodeScanListener(ABC):
    """Interface for objects listening to completed scans on a ScannerField."""

    @abstractmethod
    def barcode_scan_completed(self, event):
        """
        Called when a barcode scanner finished giving input into the field.

        The converted barcode is available from event.get_source().get_text().

        Args:
            event (BarcodeScanEvent): Event whose source is the field
        """
        pass
