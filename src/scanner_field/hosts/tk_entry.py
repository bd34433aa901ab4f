"""
Tkinter Entry that converts barcode scanner input automatically.

The entry observes its text variable. Growth is reported as an insertion,
shrinking as a removal. Deferred tasks run with after_idle, once Tk has
finished dispatching the current change.
"""

import logging
import tkinter as tk

from ..classifier import DEFAULT_BARCODE_LENGTH, DEFAULT_INPUT_DELAY
from ..field import ScannerField, TextHost

logger = logging.getLogger(__name__)


class ScannerEntry(tk.Entry, TextHost):
    """
    Entry widget with scanner detection.

    If the configured number of characters is typed one after another,
    starting from an empty entry and without deleting, within input_delay
    milliseconds, the text is treated as coming from a scanner: it is
    converted and the listeners are notified.

    Usage:
        entry = ScannerEntry(root, barcode_length=13)
        entry.add_listener(lambda event: print(event.get_source().get_text()))
    """

    def __init__(self, master=None, barcode_length=DEFAULT_BARCODE_LENGTH,
                 input_delay=DEFAULT_INPUT_DELAY, clock=None, **kwargs):
        self.text_var = kwargs.pop('textvariable', None) or tk.StringVar(master)
        tk.Entry.__init__(self, master, textvariable=self.text_var, **kwargs)

        self.scanner_field = ScannerField(self, barcode_length, input_delay, clock=clock)
        self._last_length = len(self.text_var.get())
        self._trace_id = self.text_var.trace_add('write', self._on_text_written)

    # ScannerField API

    def set_barcode_length(self, barcode_length):
        self.scanner_field.set_barcode_length(barcode_length)

    def set_input_delay(self, input_delay):
        self.scanner_field.set_input_delay(input_delay)

    def add_listener(self, listener):
        self.scanner_field.add_listener(listener)

    def remove_listener(self, listener):
        self.scanner_field.remove_listener(listener)

    # TextHost

    def get_text(self):
        return self.text_var.get()

    def set_text(self, text):
        self.text_var.set(text)
        self.icursor(tk.END)

    def defer(self, task):
        self.after_idle(task)

    def destroy(self):
        if self._trace_id is not None:
            self.text_var.trace_remove('write', self._trace_id)
            self._trace_id = None
        tk.Entry.destroy(self)

    def _on_text_written(self, *args):
        new_length = len(self.text_var.get())
        previous_length, self._last_length = self._last_length, new_length

        if new_length > previous_length:
            self.scanner_field.on_inserted(new_length)
        elif new_length < previous_length:
            self.scanner_field.on_removed(new_length)
        else:
            self.scanner_field.on_other_change()
