"""FastFind - concurrent recursive file finder.

FastFind walks large directory trees with one concurrent task per
directory, matches entry names against wildcard or regex patterns, and
streams matches through a batched output pipeline while aggregating
scan statistics.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from fastfind import SearchConfig, search

    config = SearchConfig.from_raw('/var/log', ['*.log'])
    stats = search(config)
    print(stats.match_count)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from .exceptions import (
    FastFindError,
    ConfigurationError,
    PatternCompileError,
    EnumerationError,
    EnumerationErrorKind,
    SinkClosedError,
)
from .patterns import Pattern, PatternSet, compile_pattern, compile_patterns, wildcard_to_regex
from .config import SearchConfig, PerformanceConfig
from .adapters import DirectoryEnumerator, Entry, ScandirEnumerator
from .core import Statistics, StatisticsSnapshot, ResultSink, CollectingSink, TraversalEngine
from .error_policies import (
    ErrorPolicy,
    ContinueOnErrorsPolicy,
    CollectErrorsPolicy,
    create_error_policy,
)
from .api import search, search_async, find_matches_async, count_entries_async

__all__ = [
    "__version__",
    # Errors
    "FastFindError",
    "ConfigurationError",
    "PatternCompileError",
    "EnumerationError",
    "EnumerationErrorKind",
    "SinkClosedError",
    # Patterns
    "Pattern",
    "PatternSet",
    "compile_pattern",
    "compile_patterns",
    "wildcard_to_regex",
    # Configuration
    "SearchConfig",
    "PerformanceConfig",
    # Enumeration
    "DirectoryEnumerator",
    "Entry",
    "ScandirEnumerator",
    # Core
    "Statistics",
    "StatisticsSnapshot",
    "ResultSink",
    "CollectingSink",
    "TraversalEngine",
    # Error policies
    "ErrorPolicy",
    "ContinueOnErrorsPolicy",
    "CollectErrorsPolicy",
    "create_error_policy",
    # High-level API
    "search",
    "search_async",
    "find_matches_async",
    "count_entries_async",
]
