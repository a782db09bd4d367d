"""
Logging capability set shared by Logger and LogEntry
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class FieldLogger(Protocol):
    """
    Anything that can attach context and emit leveled records.

    Implemented by Logger (chain root) and LogEntry (chain node).
    """

    def with_field(self, key: str, value: Any) -> "FieldLogger":
        ...

    def with_error(self, err: Optional[BaseException]) -> "FieldLogger":
        ...

    def debug(self, message: str) -> None:
        ...

    def info(self, message: str) -> None:
        ...

    def warn(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...
