"""
Validation of scanner field configuration values.
"""

import logging

logger = logging.getLogger(__name__)


class ScannerConfigError(ValueError):
    """Exception raised when a scanner field setting is invalid"""
    pass


def validate_barcode_length(barcode_length):
    """
    Validate the number of characters a scanned barcode contains.

    Args:
        barcode_length (int): Length at which a run is checked for scanner input

    Returns:
        int: The validated length

    Raises:
        ScannerConfigError: If the length is not a positive integer
    """
    # bool is an int subclass, True would silently mean 1
    if isinstance(barcode_length, bool) or not isinstance(barcode_length, int):
        raise ScannerConfigError(f"Barcode length must be an integer, got {barcode_length!r}")

    if barcode_length <= 0:
        raise ScannerConfigError(f"Barcode length must be positive, got {barcode_length}")

    return barcode_length


def validate_input_delay(input_delay):
    """
    Validate the maximum time between the first and last scanned character.

    Args:
        input_delay (int): Timing window in milliseconds

    Returns:
        int: The validated delay

    Raises:
        ScannerConfigError: If the delay is not a non-negative integer
    """
    if isinstance(input_delay, bool) or not isinstance(input_delay, int):
        raise ScannerConfigError(f"Input delay must be an integer number of milliseconds, got {input_delay!r}")

    if input_delay < 0:
        raise ScannerConfigError(f"Input delay cannot be negative, got {input_delay} ms")

    return input_delay


def parse_int_setting(name, raw_value):
    """Convert a setting read from a file or environment variable to int"""
    if isinstance(raw_value, int) and not isinstance(raw_value, bool):
        return raw_value
    try:
        return int(str(raw_value).strip())
    except ValueError:
        logger.error(f"Invalid value for {name}: {raw_value!r}")
        raise ScannerConfigError(f"{name} must be an integer, got {raw_value!r}") from None
