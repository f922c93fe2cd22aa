"""High-level API for FastFind.

This module provides simple functions that run a whole search: start the
sink, run the traversal to completion, drain the sink, and hand back the
final statistics.
"""

import asyncio
from typing import Iterable, List, Optional, TextIO

from .adapters import DirectoryEnumerator
from .config import PerformanceConfig, SearchConfig
from .core import CollectingSink, ResultSink, Statistics, StatisticsSnapshot, TraversalEngine
from .error_policies import ErrorPolicy
from .exceptions import ConfigurationError


async def search_async(
    config: SearchConfig,
    output: Optional[TextIO] = None,
    error_policy: Optional[ErrorPolicy] = None,
    enumerator: Optional[DirectoryEnumerator] = None,
    statistics: Optional[Statistics] = None,
    sink: Optional[ResultSink] = None
) -> StatisticsSnapshot:
    """Run one complete search and write matches to ``output``.

    The shutdown order is fixed: the traversal joins completely, only
    then is the sink told to drain, and the statistics are read after
    the sink has stopped.

    Args:
        config: Search configuration
        output: Stream receiving one matched path per line (sys.stdout if None)
        error_policy: Policy for directories that cannot be read
        enumerator: Custom directory enumerator
        statistics: Counters to update (fresh ones if None)
        sink: Prebuilt sink to feed instead of one writing to ``output``;
              its consumer must not have been started

    Returns:
        Final StatisticsSnapshot

    Raises:
        ConfigurationError: If the configuration does not validate;
                            raised before any traversal starts
    """
    problems = config.validate()
    if problems:
        raise ConfigurationError(problems)

    performance = config.performance
    if sink is None:
        sink = ResultSink(
            output=output,
            batch_size=performance.output_batch_size,
            flush_interval=performance.flush_interval,
            max_pending=performance.max_pending,
        )
    engine = TraversalEngine(
        config,
        statistics=statistics,
        sink=sink,
        enumerator=enumerator,
        error_policy=error_policy,
    )

    sink.start_consumer()
    try:
        await engine.run()
    finally:
        sink.request_drain_and_stop()
        await sink.await_consumer_stopped()

    return engine.statistics.snapshot()


def search(
    config: SearchConfig,
    output: Optional[TextIO] = None,
    error_policy: Optional[ErrorPolicy] = None,
    enumerator: Optional[DirectoryEnumerator] = None
) -> StatisticsSnapshot:
    """Synchronous wrapper around :func:`search_async`.

    Must not be called from inside a running event loop.
    """
    return asyncio.run(search_async(
        config,
        output=output,
        error_policy=error_policy,
        enumerator=enumerator,
    ))


async def find_matches_async(
    root,
    patterns: Iterable[str],
    regex: bool = False,
    include_directories: bool = False,
    max_concurrent: int = 64
) -> List[str]:
    """Collect matching paths into a list.

    Args:
        root: Directory to search
        patterns: Wildcards, or regular expressions if ``regex``
        regex: Treat patterns as regular expressions
        include_directories: Also match directories (against full paths)
        max_concurrent: Maximum concurrent directory enumerations

    Returns:
        Matched paths; order across directories is unspecified

    Example:
        >>> paths = await find_matches_async('/var/log', ['*.log', '*.gz'])
    """
    config = SearchConfig.from_raw(
        root,
        patterns,
        regex=regex,
        include_directories=include_directories,
        performance=PerformanceConfig(max_concurrent=max_concurrent),
    )
    sink = CollectingSink(batch_size=config.performance.output_batch_size)
    await search_async(config, sink=sink)
    return sink.matches


async def count_entries_async(
    root,
    max_concurrent: int = 64,
    error_policy: Optional[ErrorPolicy] = None
) -> StatisticsSnapshot:
    """Count files, directories and bytes under ``root`` without matching.

    Args:
        root: Directory to scan
        max_concurrent: Maximum concurrent directory enumerations
        error_policy: Policy for directories that cannot be read

    Returns:
        StatisticsSnapshot with match counters left at zero
    """
    config = SearchConfig.from_raw(
        root,
        [],
        performance=PerformanceConfig(max_concurrent=max_concurrent),
    )
    engine = TraversalEngine(config, error_policy=error_policy)
    return await engine.run()
