"""Shared test helpers"""


class FakeClock:
    """Manually advanced millisecond clock"""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class RecordingListener:
    """Listener remembering the text of every completed scan"""

    def __init__(self):
        self.events = []
        self.texts = []

    def barcode_scan_completed(self, event):
        self.events.append(event)
        self.texts.append(event.get_source().get_text())
