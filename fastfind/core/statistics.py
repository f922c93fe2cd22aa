"""Scan statistics shared by every traversal worker.

Counters are only ever added to. A single lock guards the whole counter
group so updates stay exact whether they come from event-loop tasks or
from enumerator worker threads. Only the snapshot taken after the root
traversal has joined is meaningful; intermediate reads may be torn
between counters.
"""

import threading
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Immutable copy of the counters at one point in time."""

    files_scanned: int = 0
    directories_scanned: int = 0
    total_bytes_scanned: int = 0
    match_count: int = 0
    match_bytes_total: int = 0
    directories_skipped: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


class Statistics:
    """Monotonic scan counters safe for concurrent writers."""

    def __init__(self):
        self._lock = threading.Lock()
        self.reset()

    def reset(self) -> None:
        """Zero all counters before a new traversal."""
        with self._lock:
            self._files_scanned = 0
            self._directories_scanned = 0
            self._total_bytes_scanned = 0
            self._match_count = 0
            self._match_bytes_total = 0
            self._directories_skipped = 0

    def increment_files_scanned(self, n: int = 1) -> None:
        with self._lock:
            self._files_scanned += n

    def increment_directories_scanned(self, n: int = 1) -> None:
        with self._lock:
            self._directories_scanned += n

    def add_total_bytes_scanned(self, n: int) -> None:
        with self._lock:
            self._total_bytes_scanned += n

    def increment_match_count(self, n: int = 1) -> None:
        with self._lock:
            self._match_count += n

    def add_match_bytes_total(self, n: int) -> None:
        """Add matched file bytes; directory matches add nothing."""
        with self._lock:
            self._match_bytes_total += n

    def increment_directories_skipped(self, n: int = 1) -> None:
        """Count directories whose enumeration failed."""
        with self._lock:
            self._directories_skipped += n

    def snapshot(self) -> StatisticsSnapshot:
        """Copy all counters under the lock.

        Returns:
            StatisticsSnapshot with the current values
        """
        with self._lock:
            return StatisticsSnapshot(
                files_scanned=self._files_scanned,
                directories_scanned=self._directories_scanned,
                total_bytes_scanned=self._total_bytes_scanned,
                match_count=self._match_count,
                match_bytes_total=self._match_bytes_total,
                directories_skipped=self._directories_skipped,
            )

    @property
    def files_scanned(self) -> int:
        return self._files_scanned

    @property
    def directories_scanned(self) -> int:
        return self._directories_scanned

    @property
    def total_bytes_scanned(self) -> int:
        return self._total_bytes_scanned

    @property
    def match_count(self) -> int:
        return self._match_count

    @property
    def match_bytes_total(self) -> int:
        return self._match_bytes_total

    @property
    def directories_skipped(self) -> int:
        return self._directories_skipped

    def __repr__(self) -> str:
        return f"Statistics({self.snapshot()!r})"
