#!/usr/bin/env python3
"""
Command line entry point for scanner-field.

    scanner-field simulate '1234567&' --interval 5
    scanner-field tk --length 13
    scanner-field evdev --device /dev/input/event3
"""

import argparse
import logging
import sys

from .utils.config import load_config
from .validation import ScannerConfigError, validate_barcode_length, validate_input_delay

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NOT_DETECTED = 1
EXIT_CONFIG_ERROR = 2


def simulate_scan(text, barcode_length, input_delay, interval=5, pause_after=None, pause=0):
    """
    Type text into an in-memory field with a simulated clock.

    Args:
        text: Characters to type, one at a time
        interval: Milliseconds between two characters
        pause_after: Add pause milliseconds after this many characters
        pause: Extra delay in milliseconds

    Returns:
        tuple: (number of completed scans, final text of the field)
    """
    from .hosts.memory import create_memory_field

    now = [0.0]
    field = create_memory_field(barcode_length, input_delay, clock=lambda: now[0])
    completed = []
    field.add_listener(lambda event: completed.append(event.get_source().get_text()))

    for index, char in enumerate(text):
        if index > 0:
            now[0] += interval
            if pause_after is not None and index == pause_after:
                now[0] += pause
        field.host.type_char(char)
        field.host.run_pending()

    return len(completed), field.get_text()


def run_simulate(args, barcode_length, input_delay):
    count, final_text = simulate_scan(args.text, barcode_length, input_delay,
                                      interval=args.interval,
                                      pause_after=args.pause_after,
                                      pause=args.pause)
    if count:
        print(f"Scan detected: {final_text}")
        return EXIT_OK
    print(f"No scan detected, text left as typed: {final_text}")
    return EXIT_NOT_DETECTED


def run_tk(args, barcode_length, input_delay):
    import tkinter as tk
    from .hosts.tk_entry import ScannerEntry

    root = tk.Tk()
    root.title("Scanner Field")

    status = tk.Label(root, text="Waiting for barcode scan...")
    entry = ScannerEntry(root, barcode_length=barcode_length, input_delay=input_delay,
                         font=("Courier", 24), width=20)
    entry.pack(padx=20, pady=10)
    status.pack(pady=10)
    entry.focus_set()

    def on_scan(event):
        barcode = event.get_source().get_text()
        logger.info(f"Scanned: {barcode}")
        status.config(text=f"Scanned: {barcode}")

    entry.add_listener(on_scan)
    root.bind('<Escape>', lambda e: root.destroy())
    root.mainloop()
    return EXIT_OK


def run_evdev(args, barcode_length, input_delay, device_path):
    import evdev
    from .hosts.evdev_reader import create_evdev_field, find_scanner_device

    device = evdev.InputDevice(device_path) if device_path else find_scanner_device()
    if device is None:
        print("No suitable scanner device found")
        print("Make sure the scanner is connected and in keyboard emulation mode")
        return EXIT_NOT_DETECTED

    field = create_evdev_field(device, barcode_length, input_delay)

    def on_scan(event):
        source = event.get_source()
        print(source.get_text(), flush=True)
        source.set_text("")

    field.add_listener(on_scan)
    try:
        field.host.run(grab=args.grab)
    except KeyboardInterrupt:
        logger.info("Stopped")
    return EXIT_OK


def build_parser():
    parser = argparse.ArgumentParser(description="Detect barcode scanner input and convert AZERTY digits")
    parser.add_argument("--config", help="Path to a config.json file")
    parser.add_argument("--length", type=int, help="Barcode length (default 8)")
    parser.add_argument("--delay", type=int, help="Max milliseconds from first to last character (default 50)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    simulate = subparsers.add_parser("simulate", help="Type text into a simulated field")
    simulate.add_argument("text", help="Characters the simulated scanner types")
    simulate.add_argument("--interval", type=float, default=5, help="Milliseconds between characters")
    simulate.add_argument("--pause-after", type=int, help="Pause after this many characters")
    simulate.add_argument("--pause", type=float, default=0, help="Pause length in milliseconds")

    subparsers.add_parser("tk", help="Open a window with a scanner entry")

    evdev_parser = subparsers.add_parser("evdev", help="Read a keyboard-wedge scanner")
    evdev_parser.add_argument("--device", help="Input device path, e.g. /dev/input/event3")
    evdev_parser.add_argument("--grab", action="store_true", help="Grab the device so other programs do not see the keys")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        config = load_config(args.config)
        settings = config["barcode_scanner"]
        barcode_length = validate_barcode_length(args.length if args.length is not None
                                                 else settings["barcode_length"])
        input_delay = validate_input_delay(args.delay if args.delay is not None
                                           else settings["input_delay"])
    except ScannerConfigError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    if args.command == "simulate":
        return run_simulate(args, barcode_length, input_delay)
    if args.command == "tk":
        return run_tk(args, barcode_length, input_delay)
    device_path = getattr(args, "device", None) or settings.get("device_path")
    return run_evdev(args, barcode_length, input_delay, device_path)


if __name__ == '__main__':
    sys.exit(main())
