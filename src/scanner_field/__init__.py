"""
scanner_field - barcode scanner detection for text fields

Tells machine speed scanner input apart from typing, converts the characters
a scanner produces on an AZERTY keyboard layout back to digits, and notifies
listeners once per completed scan.
"""

from .char_map import CHARACTER_MAP, convert_input
from .classifier import InputClassifier, Verdict
from .events import BarcodeScanEvent, BarcodeScanListener
from .field import ScannerField, TextHost
from .validation import ScannerConfigError

__all__ = [
    "CHARACTER_MAP",
    "convert_input",
    "InputClassifier",
    "Verdict",
    "BarcodeScanEvent",
    "BarcodeScanListener",
    "ScannerField",
    "TextHost",
    "ScannerConfigError",
]

__version__ = "1.0.0"
