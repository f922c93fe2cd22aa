"""Directory enumeration abstraction.

Defines how the traversal engine sees a directory: an async stream of
lightweight entries. Enumerators turn platform failures into
``EnumerationError`` with an explicit kind, so the engine can contain
them at a single call site.
"""

import errno
from abc import ABC, abstractmethod
from typing import AsyncIterator, NamedTuple, Set

from ..exceptions import EnumerationError, EnumerationErrorKind


class Entry(NamedTuple):
    """One item yielded by directory enumeration."""

    name: str
    is_directory: bool
    size_in_bytes: int = 0


# errno values that mean "you may not look in here"
_ACCESS_DENIED_ERRNOS = {errno.EACCES, errno.EPERM}


def classify_os_error(error: OSError) -> EnumerationErrorKind:
    """Map an OSError onto an enumeration error kind.

    Args:
        error: Exception raised by the platform call

    Returns:
        ACCESS_DENIED, PATH_TOO_LONG or OTHER
    """
    if isinstance(error, PermissionError) or error.errno in _ACCESS_DENIED_ERRNOS:
        return EnumerationErrorKind.ACCESS_DENIED
    if error.errno == errno.ENAMETOOLONG:
        return EnumerationErrorKind.PATH_TOO_LONG
    # Windows reports over-long paths as ERROR_FILENAME_EXCED_RANGE (206)
    if getattr(error, 'winerror', None) == 206:
        return EnumerationErrorKind.PATH_TOO_LONG
    return EnumerationErrorKind.OTHER


def enumeration_error_from(path: str, error: OSError) -> EnumerationError:
    """Wrap an OSError raised while enumerating ``path``."""
    return EnumerationError(path, classify_os_error(error), error)


class DirectoryEnumerator(ABC):
    """Abstract base class for directory enumerators.

    Implementations must stream entries rather than materialising huge
    directories, and must not impose a path-length ceiling of their own.
    """

    @abstractmethod
    async def enumerate(self, path: str) -> AsyncIterator[Entry]:
        """Stream the entries of one directory.

        Args:
            path: Directory to list

        Yields:
            Entry for every item in the directory, in platform order

        Raises:
            EnumerationError: If the directory (or the rest of it) cannot
                              be read
        """
        pass

    def _define_capabilities(self) -> Set[str]:
        """Declare what this enumerator can do.

        Override in subclasses to advertise extra features.
        """
        return {'enumerate', 'streaming'}

    def supports_capability(self, capability: str) -> bool:
        return capability in self._define_capabilities()

    async def close(self):
        """Release enumerator resources, if any."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
