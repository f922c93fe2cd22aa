"""Core components of the concurrent scanner.

Statistics aggregation, the batched result sink, and the traversal
engine that ties them together.
"""

from .statistics import Statistics, StatisticsSnapshot
from .sink import CollectingSink, ResultSink
from .engine import TraversalEngine

__all__ = [
    'Statistics',
    'StatisticsSnapshot',
    'ResultSink',
    'CollectingSink',
    'TraversalEngine',
]
