"""Console sink"""

import sys


class ConsoleWriter:
    """Write formatted records to a console stream."""

    def __init__(self, stream=None):
        """
        Initialize console writer.

        Args:
            stream: Output stream (default: sys.stderr)
        """
        self.stream = stream or sys.stderr

    def write(self, text: str) -> int:
        """Write text, flushing once a record is complete."""
        written = self.stream.write(text)
        if text.endswith("\n"):
            self.stream.flush()
        return written

    def flush(self):
        """Flush stream."""
        self.stream.flush()
