"""Configuration system for FastFind.

This module defines how callers describe a search: where to start, what
names to look for, and the performance limits the engine runs under.
Configurations are immutable once built and shared read-only by every
traversal worker.
"""

import os
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .patterns import PatternSet, compile_patterns


@dataclass(frozen=True)
class PerformanceConfig:
    """Configuration for concurrency and output batching."""

    max_concurrent: int = 64                # Directories enumerated at once
    enumeration_batch_size: int = 256       # Entries per worker-thread hop
    output_batch_size: int = 100            # Lines per bulk write
    flush_interval: Optional[float] = 0.5   # Idle seconds before partial flush
    max_pending: int = 0                    # Sink queue bound (0 = unbounded)

    @classmethod
    def low_memory(cls) -> 'PerformanceConfig':
        """Create config that keeps in-flight work small.

        Returns:
            PerformanceConfig with few concurrent enumerations and a
            bounded sink queue
        """
        return cls(
            max_concurrent=8,
            enumeration_batch_size=64,
            output_batch_size=50,
            max_pending=10000,
        )

    @classmethod
    def high_throughput(cls) -> 'PerformanceConfig':
        """Create config for fast local disks and very wide trees.

        Returns:
            PerformanceConfig with many concurrent enumerations and large
            output batches
        """
        return cls(
            max_concurrent=256,
            enumeration_batch_size=1024,
            output_batch_size=500,
        )

    def validate(self) -> List[str]:
        """Validate limits.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_concurrent <= 0:
            errors.append("max_concurrent must be positive")
        if self.enumeration_batch_size <= 0:
            errors.append("enumeration_batch_size must be positive")
        if self.output_batch_size <= 0:
            errors.append("output_batch_size must be positive")
        if self.flush_interval is not None and self.flush_interval <= 0:
            errors.append("flush_interval must be positive or None")
        if self.max_pending < 0:
            errors.append("max_pending cannot be negative")

        return errors


@dataclass(frozen=True)
class SearchConfig:
    """Complete configuration for one search.

    Attributes:
        root_path: Directory the traversal starts from
        patterns: Compiled patterns, tried in declaration order
        include_directories: Match directories too, against full paths
        follow_symlinks: Resolve symbolic links while enumerating
        performance: Concurrency and batching limits
    """

    root_path: str
    patterns: PatternSet
    include_directories: bool = False
    follow_symlinks: bool = False
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)

    @classmethod
    def from_raw(
        cls,
        root_path,
        raw_patterns: Iterable[str],
        regex: bool = False,
        include_directories: bool = False,
        follow_symlinks: bool = False,
        performance: Optional[PerformanceConfig] = None
    ) -> 'SearchConfig':
        """Create a config from uncompiled user patterns.

        Args:
            root_path: Directory to search (str or PathLike)
            raw_patterns: Wildcards, or regular expressions if ``regex``
            regex: Treat patterns as regular expressions
            include_directories: Also match directory paths
            follow_symlinks: Resolve symbolic links while enumerating
            performance: Optional performance limits

        Returns:
            SearchConfig with compiled patterns

        Raises:
            PatternCompileError: If any pattern fails to compile
        """
        return cls(
            root_path=os.fspath(root_path),
            patterns=compile_patterns(raw_patterns, regex_mode=regex),
            include_directories=include_directories,
            follow_symlinks=follow_symlinks,
            performance=performance or PerformanceConfig(),
        )

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not self.root_path:
            errors.append("root path cannot be empty")
        elif not os.path.isdir(self.root_path):
            errors.append(f"root path '{self.root_path}' is not an existing directory")

        if not self.patterns:
            errors.append("at least one pattern is required")

        errors.extend(self.performance.validate())

        return errors
