"""
Text hosts for ScannerField.

memory is always available; tk_entry needs tkinter and evdev_reader needs
the evdev package, so import them directly.
"""

from .memory import MemoryTextHost, create_memory_field

__all__ = ["MemoryTextHost", "create_memory_field"]
