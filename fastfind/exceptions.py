"""Exception hierarchy for FastFind.

Only configuration problems ever reach the caller. Enumeration failures
are raised by enumerators but contained by the traversal engine, which
hands them to an error policy instead of letting them unwind.
"""

from enum import Enum
from typing import Optional


class FastFindError(Exception):
    """Base class for all FastFind errors."""


class ConfigurationError(FastFindError):
    """The search configuration is unusable; raised before any I/O."""

    def __init__(self, problems):
        self.problems = list(problems)
        super().__init__("; ".join(self.problems) or "invalid configuration")


class PatternCompileError(ConfigurationError):
    """A raw pattern could not be compiled into a regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__([f"Invalid pattern '{pattern}': {reason}"])


class EnumerationErrorKind(Enum):
    """Why a directory could not be enumerated."""
    ACCESS_DENIED = "access_denied"
    PATH_TOO_LONG = "path_too_long"
    OTHER = "other"


class EnumerationError(FastFindError):
    """A directory could not be (fully) enumerated."""

    def __init__(
        self,
        path: str,
        kind: EnumerationErrorKind = EnumerationErrorKind.OTHER,
        cause: Optional[BaseException] = None
    ):
        self.path = path
        self.kind = kind
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Cannot enumerate '{path}' ({kind.value}){detail}")


class SinkClosedError(FastFindError):
    """A match was enqueued after the sink was told to drain."""
