"""Testing utilities for FastFind consumers."""

from .fixtures import (
    MemoryEnumerator,
    CountingStream,
    build_tree,
    expected_counts,
    relative_matches,
)

__all__ = [
    'MemoryEnumerator',
    'CountingStream',
    'build_tree',
    'expected_counts',
    'relative_matches',
]
