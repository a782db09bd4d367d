"""File sink"""

from pathlib import Path


class FileWriter:
    """Append formatted records to a file."""

    def __init__(
        self,
        filepath: str,
        mode: str = "a",
        encoding: str = "utf-8"
    ):
        """
        Initialize file writer.

        Args:
            filepath: Path to log file
            mode: File open mode (default: 'a' for append)
            encoding: File encoding (default: 'utf-8')
        """
        self.filepath = Path(filepath)
        self.mode = mode
        self.encoding = encoding
        self._file = None
        self._open()

    def _open(self):
        """Open log file."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.filepath, self.mode, encoding=self.encoding)

    def write(self, text: str) -> int:
        """Write text to file."""
        if self._file is None:
            raise ValueError(f"write to closed log file {self.filepath}")
        return self._file.write(text)

    def flush(self):
        """Flush file buffer."""
        if self._file:
            self._file.flush()

    def close(self):
        """Close file."""
        if self._file:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self) -> "FileWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
