"""
Keyboard-wedge scanner reader using evdev.

Key presses are translated through a Belgian AZERTY layout into a text
buffer, which is the text field the ScannerField observes. A scanner in
keyboard emulation mode presses the digit row without shift, so digits
arrive as &é"'(§è!çà and are converted back once a scan is detected.
"""

import logging
from collections import deque
from typing import Callable, Deque, List, Optional

import evdev
from evdev import ecodes

from ..classifier import DEFAULT_BARCODE_LENGTH, DEFAULT_INPUT_DELAY
from ..field import ScannerField, TextHost

logger = logging.getLogger(__name__)

# key code -> (unshifted, shifted)
AZERTY_BE_LAYOUT = {
    ecodes.KEY_1: ('&', '1'),
    ecodes.KEY_2: ('é', '2'),
    ecodes.KEY_3: ('"', '3'),
    ecodes.KEY_4: ("'", '4'),
    ecodes.KEY_5: ('(', '5'),
    ecodes.KEY_6: ('§', '6'),
    ecodes.KEY_7: ('è', '7'),
    ecodes.KEY_8: ('!', '8'),
    ecodes.KEY_9: ('ç', '9'),
    ecodes.KEY_0: ('à', '0'),
    ecodes.KEY_MINUS: (')', '°'),
    ecodes.KEY_EQUAL: ('-', '_'),
    ecodes.KEY_SPACE: (' ', ' '),
    ecodes.KEY_M: (',', '?'),
    ecodes.KEY_COMMA: (';', '.'),
    ecodes.KEY_DOT: (':', '/'),
    ecodes.KEY_SLASH: ('=', '+'),
    ecodes.KEY_SEMICOLON: ('m', 'M'),
    ecodes.KEY_KP0: ('0', '0'),
    ecodes.KEY_KP1: ('1', '1'),
    ecodes.KEY_KP2: ('2', '2'),
    ecodes.KEY_KP3: ('3', '3'),
    ecodes.KEY_KP4: ('4', '4'),
    ecodes.KEY_KP5: ('5', '5'),
    ecodes.KEY_KP6: ('6', '6'),
    ecodes.KEY_KP7: ('7', '7'),
    ecodes.KEY_KP8: ('8', '8'),
    ecodes.KEY_KP9: ('9', '9'),
}

# Letters that sit at a different place on AZERTY
_AZERTY_LETTER_SWAPS = {'q': 'a', 'a': 'q', 'w': 'z', 'z': 'w'}

for _letter in 'abcdefghijklnopqrstuvwxyz':
    _code = getattr(ecodes, f"KEY_{_letter.upper()}")
    _char = _AZERTY_LETTER_SWAPS.get(_letter, _letter)
    AZERTY_BE_LAYOUT[_code] = (_char, _char.upper())

SHIFT_KEYS = {ecodes.KEY_LEFTSHIFT, ecodes.KEY_RIGHTSHIFT}
CLEAR_KEYS = {ecodes.KEY_ENTER, ecodes.KEY_KPENTER, ecodes.KEY_ESC}

KEY_DOWN = 1
KEY_UP = 0

SCANNER_NAME_WORDS = ['barcode', 'scanner', 'honeywell', 'symbol', 'datalogic', 'zebra', 'pos']


def translate_key(key_code, shifted=False):
    """Return the character a key produces on the AZERTY layout, or None"""
    chars = AZERTY_BE_LAYOUT.get(key_code)
    if chars is None:
        return None
    return chars[1] if shifted else chars[0]


def find_scanner_device():
    """
    Find a USB barcode scanner among the evdev input devices.

    Devices are matched by name first, then by keyboard capabilities.

    Returns:
        evdev.InputDevice or None
    """
    devices = [evdev.InputDevice(path) for path in evdev.list_devices()]
    keyboard_candidate = None

    for device in devices:
        name = device.name.lower()
        if any(word in name for word in SCANNER_NAME_WORDS):
            logger.info(f"Found scanner by name: {device.name} ({device.path})")
            return device

        caps = device.capabilities()
        if keyboard_candidate is None and ecodes.EV_KEY in caps:
            keys = caps[ecodes.EV_KEY]
            has_letters = any(ecodes.KEY_A + i in keys for i in range(26))
            has_numbers = ecodes.KEY_1 in keys and ecodes.KEY_0 in keys
            has_enter = ecodes.KEY_ENTER in keys
            if has_letters and has_numbers and has_enter:
                keyboard_candidate = device

    if keyboard_candidate is not None:
        logger.info(f"Using keyboard device (possible scanner): {keyboard_candidate.name}")
    else:
        logger.warning("No suitable scanner device found")
    return keyboard_candidate


class EvdevTextHost(TextHost):
    """
    Text buffer fed by key events from an evdev input device.

    Deferred tasks run after the key event that scheduled them has been
    fully dispatched.
    """

    def __init__(self, device=None):
        self.device = device
        self.text = ""
        self.shifted = False
        self.event_time_ms = 0.0
        self._observers: List = []
        self._pending: Deque[Callable[[], None]] = deque()
        self._grabbed = False

    def add_observer(self, observer) -> None:
        self._observers.append(observer)

    # TextHost

    def get_text(self) -> str:
        return self.text

    def set_text(self, text: str) -> None:
        if self.text:
            self.text = ""
            self._notify('on_removed')
        if text:
            self.text = text
            self._notify('on_inserted')

    def defer(self, task: Callable[[], None]) -> None:
        self._pending.append(task)

    def clock(self) -> float:
        """Time of the key event being handled, in milliseconds"""
        return self.event_time_ms

    # Event handling

    def handle_event(self, event) -> None:
        if event.type != ecodes.EV_KEY:
            return

        self.event_time_ms = event.timestamp() * 1000.0

        if event.code in SHIFT_KEYS:
            self.shifted = event.value != KEY_UP
            return

        # Ignore releases and autorepeat
        if event.value == KEY_DOWN:
            self._handle_key_press(event.code)
        self._run_pending()

    def _handle_key_press(self, key_code) -> None:
        if key_code == ecodes.KEY_BACKSPACE:
            if self.text:
                self.text = self.text[:-1]
                self._notify('on_removed')
            return

        if key_code in CLEAR_KEYS:
            self.set_text("")
            return

        char = translate_key(key_code, self.shifted)
        if char is None:
            logger.debug(f"Ignoring unmapped key code {key_code}")
            return

        self.text += char
        self._notify('on_inserted')

    def _run_pending(self) -> None:
        while self._pending:
            task = self._pending.popleft()
            task()

    def _notify(self, method_name) -> None:
        length = len(self.text)
        for observer in list(self._observers):
            getattr(observer, method_name)(length)

    # Device loop

    def run(self, grab=False) -> None:
        """Read key events from the device until it is closed or disconnected"""
        if self.device is None:
            raise RuntimeError("No input device to read from")

        logger.info(f"Reading from: {self.device.name} ({self.device.path})")
        if grab:
            self.device.grab()
            self._grabbed = True
        try:
            for event in self.device.read_loop():
                self.handle_event(event)
        except OSError as e:
            logger.warning(f"Input device stopped: {e}")
        finally:
            self.close()

    def close(self) -> None:
        if self.device is None:
            return
        if self._grabbed:
            try:
                self.device.ungrab()
            except OSError as e:
                logger.debug(f"Ungrab failed: {e}")
            self._grabbed = False
        self.device.close()
        logger.info("Input device closed")


def create_evdev_field(device=None, barcode_length: int = DEFAULT_BARCODE_LENGTH,
                       input_delay: int = DEFAULT_INPUT_DELAY) -> ScannerField:
    """Create a ScannerField reading from an evdev device, timed by the event timestamps"""
    host = EvdevTextHost(device)
    field = ScannerField(host, barcode_length, input_delay, clock=host.clock)
    host.add_observer(field)
    return field
