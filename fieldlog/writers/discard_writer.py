"""No-op sink"""


class DiscardWriter:
    """Accept and drop everything written to it."""

    def write(self, text: str) -> int:
        return len(text)

    def flush(self):
        pass
