"""Concurrent traversal engine.

Walks a directory tree with one asyncio task per directory. Each task
enumerates its directory, counts and matches the entries, spawns a child
task per subdirectory and then joins those children, so awaiting the
root ``run()`` means the whole tree under it is finished.

Blocking enumeration happens on worker threads; a semaphore bounds how
many directories are being enumerated at once. The permit is released
before a task joins its children, so waiting parents never starve the
children they are waiting on.
"""

import asyncio
import os
from typing import List, Optional

from ..adapters import DirectoryEnumerator, Entry, ScandirEnumerator, enumeration_error_from
from ..config import SearchConfig
from ..error_policies import CollectErrorsPolicy, ErrorPolicy
from ..exceptions import EnumerationError, EnumerationErrorKind
from .sink import ResultSink
from .statistics import Statistics, StatisticsSnapshot


_PSEUDO_DIRECTORIES = frozenset(('.', '..'))


class TraversalEngine:
    """Recursive fan-out scanner with fork-join completion.

    The engine owns no global state: statistics, sink, enumerator and
    error policy are all passed in (or defaulted per instance), so
    several engines can run side by side in one process.

    Attributes:
        config: Read-only search configuration
        statistics: Counters updated by every directory task
        sink: Receives matched paths; None counts matches without output
        enumerator: Lists directories
        error_policy: Told about every directory that had to be skipped
    """

    def __init__(
        self,
        config: SearchConfig,
        statistics: Optional[Statistics] = None,
        sink: Optional[ResultSink] = None,
        enumerator: Optional[DirectoryEnumerator] = None,
        error_policy: Optional[ErrorPolicy] = None
    ):
        """Initialize the engine.

        Args:
            config: Search configuration shared by all workers
            statistics: Counters to update (a fresh set if omitted)
            sink: Output pipeline for matches
            enumerator: Directory enumerator (ScandirEnumerator if omitted)
            error_policy: Policy for skipped directories
                          (CollectErrorsPolicy if omitted)
        """
        self.config = config
        self.statistics = statistics if statistics is not None else Statistics()
        self.sink = sink
        self.enumerator = enumerator or ScandirEnumerator(
            batch_size=config.performance.enumeration_batch_size,
            follow_symlinks=config.follow_symlinks,
        )
        self.error_policy = error_policy or CollectErrorsPolicy()
        self.max_concurrent = config.performance.max_concurrent
        self._semaphore: Optional[asyncio.Semaphore] = None

    async def run(self, path=None) -> StatisticsSnapshot:
        """Traverse the tree under ``path`` and wait for all of it.

        Args:
            path: Directory to start from (defaults to config.root_path)

        Returns:
            Snapshot of the statistics once the whole fan-out has joined
        """
        root = os.fspath(path) if path is not None else self.config.root_path
        if self._semaphore is None:
            # Created here so it belongs to the running loop
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
        await self._scan_directory(root)
        return self.statistics.snapshot()

    async def _scan_directory(self, path: str) -> None:
        """One directory task: enumerate, then join every child task."""
        children: List[asyncio.Task] = []
        try:
            async with self._semaphore:
                await self._enumerate_directory(path, children)
        finally:
            if children:
                results = await asyncio.gather(*children, return_exceptions=True)
                for result in results:
                    if isinstance(result, BaseException):
                        raise result

    async def _enumerate_directory(self, path: str, children: List[asyncio.Task]) -> None:
        """Process every entry of ``path``, spawning tasks for subdirectories.

        Enumeration failures end this directory quietly; entries seen
        before the failure stay counted and their subtrees still run.
        """
        entries = self.enumerator.enumerate(path)
        try:
            while True:
                try:
                    entry = await entries.__anext__()
                except StopAsyncIteration:
                    break
                except EnumerationError as e:
                    self._skip_directory(path, e)
                    break
                except OSError as e:
                    self._skip_directory(path, enumeration_error_from(path, e))
                    break
                except Exception as e:
                    self._skip_directory(path, EnumerationError(path, EnumerationErrorKind.OTHER, e))
                    break

                if entry.name in _PSEUDO_DIRECTORIES:
                    continue

                child_path = os.path.join(path, entry.name)
                if entry.is_directory:
                    await self._visit_directory(child_path)
                    children.append(asyncio.create_task(self._scan_directory(child_path)))
                else:
                    await self._visit_file(entry, child_path)
        finally:
            aclose = getattr(entries, 'aclose', None)
            if aclose is not None:
                await aclose()

    async def _visit_directory(self, child_path: str) -> None:
        self.statistics.increment_directories_scanned()
        if self.config.include_directories and self.config.patterns.matches(child_path):
            self.statistics.increment_match_count()
            await self._emit(child_path)

    async def _visit_file(self, entry: Entry, child_path: str) -> None:
        size = entry.size_in_bytes
        self.statistics.increment_files_scanned()
        self.statistics.add_total_bytes_scanned(size)
        # Leaf name only, unless directories are in play: then full paths
        candidate = child_path if self.config.include_directories else entry.name
        if self.config.patterns.matches(candidate):
            self.statistics.increment_match_count()
            self.statistics.add_match_bytes_total(size)
            await self._emit(child_path)

    async def _emit(self, matched_path: str) -> None:
        if self.sink is not None:
            await self.sink.enqueue(matched_path)

    def _skip_directory(self, path: str, error: EnumerationError) -> None:
        self.statistics.increment_directories_skipped()
        self.error_policy.handle(error, path)

    def __repr__(self) -> str:
        return (
            f"TraversalEngine(root={self.config.root_path!r}, "
            f"max_concurrent={self.max_concurrent}, enumerator={self.enumerator!r})"
        )
