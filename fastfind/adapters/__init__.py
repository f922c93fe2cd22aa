"""Directory enumerators.

This package contains the bridge between the traversal engine and the
platform: the enumerator interface and its os.scandir implementation.
"""

from .enumerator import (
    DirectoryEnumerator,
    Entry,
    classify_os_error,
    enumeration_error_from,
)
from .scandir import ScandirEnumerator, extended_length_path

__all__ = [
    'DirectoryEnumerator',
    'Entry',
    'ScandirEnumerator',
    'classify_os_error',
    'enumeration_error_from',
    'extended_length_path',
]
