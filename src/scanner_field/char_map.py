"""
Character converter for scanners typing on an AZERTY keyboard layout.

A scanner in keyboard emulation mode sends the key codes of the digit row.
Without shift, an AZERTY layout turns those keys into the characters below,
so they are mapped back to the digits the barcode contains.
"""

CHARACTER_MAP = {
    '&': '1',
    'é': '2',
    '"': '3',
    "'": '4',
    '(': '5',
    '§': '6',
    'è': '7',
    '!': '8',
    'ç': '9',
    'à': '0',
}

_TRANSLATION = str.maketrans(CHARACTER_MAP)


def convert_input(text):
    """
    Convert all scanned special characters to digits.

    Characters missing from CHARACTER_MAP pass through unchanged, so
    converting already converted text returns it as is.

    Args:
        text (str): Raw text typed by the scanner

    Returns:
        str: Converted text
    """
    return text.translate(_TRANSLATION)
