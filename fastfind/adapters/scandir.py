"""Filesystem enumerator built on os.scandir.

Uses DirEntry's cached type information to avoid extra syscalls, and
pulls entries from the scandir iterator in batches on a worker thread so
neither the event loop nor memory is tied up by huge directories.
"""

import asyncio
import os
from typing import AsyncIterator, List, Optional, Set, Tuple

from .enumerator import DirectoryEnumerator, Entry, enumeration_error_from


# Windows refuses paths at or beyond MAX_PATH without the extended prefix
_WINDOWS_MAX_PATH = 260
_EXTENDED_PREFIX = '\\\\?\\'


def extended_length_path(path: str) -> str:
    """Return a form of ``path`` the platform can open regardless of length.

    On Windows, absolute paths at or beyond MAX_PATH get the ``\\\\?\\``
    prefix (``\\\\?\\UNC\\`` for network shares). Elsewhere the path is
    returned unchanged.
    """
    if os.name != 'nt' or len(path) < _WINDOWS_MAX_PATH:
        return path
    if path.startswith(_EXTENDED_PREFIX) or not os.path.isabs(path):
        return path
    if path.startswith('\\\\'):
        return _EXTENDED_PREFIX + 'UNC\\' + path[2:]
    return _EXTENDED_PREFIX + path


class ScandirEnumerator(DirectoryEnumerator):
    """Stream directory entries using os.scandir.

    Symbolic links are not followed by default: a link to a directory is
    reported as a plain entry with the link's own size and never recursed
    into, which keeps link cycles out of the walk.
    """

    def __init__(self, batch_size: int = 256, follow_symlinks: bool = False):
        """Initialize the enumerator.

        Args:
            batch_size: Entries read per worker-thread hop
            follow_symlinks: Whether links are resolved for type and size
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size
        self.follow_symlinks = follow_symlinks

    async def enumerate(self, path: str) -> AsyncIterator[Entry]:
        """Stream the entries of ``path`` in scandir order.

        Raises:
            EnumerationError: If the directory cannot be opened or reading
                              it fails part way through
        """
        target = extended_length_path(os.fspath(path))

        try:
            iterator = await asyncio.to_thread(os.scandir, target)
        except OSError as e:
            raise enumeration_error_from(path, e) from e

        try:
            while True:
                try:
                    batch, error = await asyncio.to_thread(self._read_batch, iterator)
                except OSError as e:
                    raise enumeration_error_from(path, e) from e
                # Entries read before a failure are still delivered
                for entry in batch:
                    yield entry
                if error is not None:
                    raise enumeration_error_from(path, error) from error
                if not batch:
                    break
        finally:
            iterator.close()

    def _read_batch(self, iterator) -> Tuple[List[Entry], Optional[OSError]]:
        """Pull up to ``batch_size`` entries off the scandir iterator.

        Runs on a worker thread.

        Returns:
            The entries read, and the OSError that stopped the listing
            part way through (None if it did not fail)
        """
        batch: List[Entry] = []
        try:
            for dir_entry in iterator:
                entry = self._to_entry(dir_entry)
                if entry is not None:
                    batch.append(entry)
                    if len(batch) >= self.batch_size:
                        break
        except OSError as e:
            return batch, e
        return batch, None

    def _to_entry(self, dir_entry: os.DirEntry) -> Optional[Entry]:
        """Convert a DirEntry, or None if it cannot be inspected at all."""
        try:
            if dir_entry.is_dir(follow_symlinks=self.follow_symlinks):
                return Entry(dir_entry.name, True, 0)
            try:
                stat = dir_entry.stat(follow_symlinks=self.follow_symlinks)
            except OSError:
                if not self.follow_symlinks:
                    raise
                # Broken link: report the link itself
                stat = dir_entry.stat(follow_symlinks=False)
            return Entry(dir_entry.name, False, stat.st_size)
        except OSError:
            # Vanished between listing and stat, or otherwise unreadable
            return None

    def _define_capabilities(self) -> Set[str]:
        capabilities = super()._define_capabilities()
        capabilities.add('long_paths')
        if self.follow_symlinks:
            capabilities.add('follow_symlinks')
        return capabilities

    def __repr__(self) -> str:
        return (
            f"ScandirEnumerator(batch_size={self.batch_size}, "
            f"follow_symlinks={self.follow_symlinks})"
        )
