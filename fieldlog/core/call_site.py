"""
Call-site resolution

Recovers the package, function, file and line of the code that issued
a logging call. Stack inspection lives behind CallSiteResolver so it can
be swapped for an explicit location when frames are unreliable.
"""

from __future__ import annotations

import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class CallSite:
    """Location of a logging call (or of an attached error)."""

    package: str
    function: str
    file: str
    line: int

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert call site to dictionary.

        Returns:
            Dictionary with package, function, file and line keys
        """
        return {
            "package": self.package,
            "function": self.function,
            "file": self.file,
            "line": self.line,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CallSite":
        """Create call site from dictionary."""
        return cls(
            package=data.get("package", ""),
            function=data.get("function", ""),
            file=data.get("file", ""),
            line=data.get("line", 0),
        )


UNKNOWN_CALL_SITE = CallSite(package="unknown", function="unknown", file="unknown", line=0)


def qualified_function_name(module: str, qualname: str) -> str:
    """
    Build the fully qualified name of a function.

    Methods are written with their class in parentheses, so
    ``qualified_function_name("app.db", "Pool.acquire")`` gives
    ``"app.db.(Pool).acquire"``. Functions nested in other functions
    keep only their own name.
    """
    parts = qualname.split(".")
    if len(parts) > 1 and parts[-2] != "<locals>":
        return f"{module}.({parts[-2]}).{parts[-1]}"
    return f"{module}.{parts[-1]}"


def split_function_name(name: str) -> Tuple[str, str]:
    """
    Split a fully qualified function name into (package, function).

    If the second-to-last segment starts with "(" it is a method receiver
    and is folded into the function name.

    Examples:
        >>> split_function_name("app.db.(Pool).acquire")
        ('app.db', '(Pool).acquire')
        >>> split_function_name("app.db.connect")
        ('app.db', 'connect')
    """
    parts = name.split(".")
    function = parts[-1]

    if len(parts) >= 2 and parts[-2].startswith("("):
        function = parts[-2] + "." + function
        package = ".".join(parts[:-2])
    else:
        package = ".".join(parts[:-1])

    return package, function


class CallSiteResolver(ABC):
    """
    Abstract base class for call-site resolvers.

    Resolvers are called from inside the logging machinery and report the
    location of the user code that started the logging call.
    """

    @abstractmethod
    def resolve(self, skip: int = 0) -> CallSite:
        """
        Resolve the current logging call site.

        Args:
            skip: Extra caller frames to skip past the first user frame

        Returns:
            Call site, or UNKNOWN_CALL_SITE when it cannot be determined
        """
        pass

    def __call__(self, skip: int = 0) -> CallSite:
        """Allow resolvers to be callable."""
        return self.resolve(skip)


class StackCallSiteResolver(CallSiteResolver):
    """
    Resolve call sites by walking the live interpreter stack.

    Frames whose module belongs to one of ``internal_packages`` are the
    logging machinery itself and are never reported.
    """

    def __init__(self, internal_packages: Iterable[str] = ("fieldlog",), skip: int = 0):
        """
        Initialize stack resolver.

        Args:
            internal_packages: Top-level packages treated as logging internals
            skip: Frames to skip beyond the first non-internal frame, for
                  applications that wrap the logger in their own helpers
        """
        self.internal_packages = tuple(internal_packages)
        self.skip = skip

    def _is_internal(self, module: str) -> bool:
        for prefix in self.internal_packages:
            if module == prefix or module.startswith(prefix + "."):
                return True
        return False

    def resolve(self, skip: int = 0) -> CallSite:
        try:
            frame = sys._getframe(1)
        except ValueError:
            return UNKNOWN_CALL_SITE

        while frame is not None and self._is_internal(frame.f_globals.get("__name__", "")):
            frame = frame.f_back

        remaining = self.skip + skip
        while frame is not None and remaining > 0:
            frame = frame.f_back
            remaining -= 1

        if frame is None:
            return UNKNOWN_CALL_SITE

        return self._call_site_for(frame)

    def _call_site_for(self, frame) -> CallSite:
        code = frame.f_code
        module = frame.f_globals.get("__name__", "")
        package, function = split_function_name(
            qualified_function_name(module, _qualname(frame))
        )
        return CallSite(
            package=package,
            function=function,
            file=os.path.basename(code.co_filename),
            line=frame.f_lineno,
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"StackCallSiteResolver(internal={self.internal_packages}, skip={self.skip})"


class StaticCallSiteResolver(CallSiteResolver):
    """
    Report a caller-supplied location instead of inspecting the stack.

    Useful where frames are unavailable or do not reflect the logical
    origin of a record (generated code, bridges from other runtimes).
    """

    def __init__(self, call_site: Optional[CallSite] = None):
        self.call_site = call_site or UNKNOWN_CALL_SITE

    def resolve(self, skip: int = 0) -> CallSite:
        return self.call_site

    def __repr__(self) -> str:
        """String representation."""
        return f"StaticCallSiteResolver({self.call_site!r})"


def _qualname(frame) -> str:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", None)
    if qualname is not None:
        return qualname

    # Before 3.11 code objects carry no qualname; recover the class from
    # the conventional first argument.
    f_locals = frame.f_locals
    if "self" in f_locals:
        return f"{type(f_locals['self']).__name__}.{code.co_name}"
    if "cls" in f_locals and isinstance(f_locals["cls"], type):
        return f"{f_locals['cls'].__name__}.{code.co_name}"
    return code.co_name
