"""
Error handling policies for FastFind.

A failed directory is always skipped by the traversal engine; policies
decide what else happens: whether the failure is recorded, and whether
a warning is printed. Policies never raise, so a bad subtree can never
abort the rest of the walk.
"""

import sys
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .exceptions import EnumerationError, EnumerationErrorKind


class ErrorPolicy(ABC):
    """
    Base class for per-directory error policies.

    Subclasses implement different strategies for reporting directories
    that could not be enumerated.
    """

    @abstractmethod
    def handle(self, error: EnumerationError, path: str) -> None:
        """
        Handle a directory that could not be enumerated.

        Called from the single traversal frame that owns ``path``. Must not
        raise; the directory is skipped regardless of what the policy does.

        Args:
            error: The enumeration failure, with its kind and cause
            path: The directory being enumerated when it failed
        """
        pass


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors, optionally warns, and lets traversal go on.

    Used by the command line with --verbose. Errors are collected for later
    inspection.
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, print warnings to stderr when errors occur
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose
        self._lock = threading.Lock()

    def handle(self, error: EnumerationError, path: str) -> None:
        """Record the error and warn if verbose."""
        self._record(error, path)

        if self.verbose:
            if error.kind is EnumerationErrorKind.ACCESS_DENIED:
                print(f"WARNING: Skipping inaccessible path '{path}': {error.cause}", file=sys.stderr)
            else:
                print(f"WARNING: Skipping '{path}' ({error.kind.value}): {error.cause}", file=sys.stderr)

    def _record(self, error: EnumerationError, path: str) -> None:
        cause = error.cause
        error_record = {
            'path': path,
            'kind': error.kind,
            'error': error,
            'error_type': type(cause).__name__ if cause is not None else type(error).__name__,
            'error_message': str(cause) if cause is not None else str(error),
        }
        with self._lock:
            self.errors.append(error_record)
            self.skipped_paths.append(path)

    def get_statistics(self) -> dict:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        with self._lock:
            errors = list(self.errors)
        return {
            'total_errors': len(errors),
            'access_denied': sum(1 for e in errors if e['kind'] is EnumerationErrorKind.ACCESS_DENIED),
            'path_too_long': sum(1 for e in errors if e['kind'] is EnumerationErrorKind.PATH_TOO_LONG),
            'other_errors': sum(1 for e in errors if e['kind'] is EnumerationErrorKind.OTHER),
            'skipped_paths': len(self.skipped_paths),
            'errors': errors,
        }

    def clear(self) -> None:
        with self._lock:
            self.errors.clear()
            self.skipped_paths.clear()


class CollectErrorsPolicy(ContinueOnErrorsPolicy):
    """
    Policy that collects all errors without printing anything.

    Useful for library callers that present skipped paths themselves.
    """

    def __init__(self):
        super().__init__(verbose=False)


def create_error_policy(verbose: bool = False) -> ErrorPolicy:
    """
    Convenience function to pick the policy for a run.

    Args:
        verbose: If True, warn on stderr for every skipped directory

    Returns:
        ContinueOnErrorsPolicy when verbose, CollectErrorsPolicy otherwise
    """
    if verbose:
        return ContinueOnErrorsPolicy(verbose=True)
    return CollectErrorsPolicy()
