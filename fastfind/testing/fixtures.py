"""Test fixtures for FastFind consumers.

These fixtures let test suites drive the traversal engine without
touching the real filesystem, inject enumeration failures at chosen
directories, and observe how output was batched.
"""

import asyncio
import io
import os
import random
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List, Optional, Set, Union

from ..adapters import DirectoryEnumerator, Entry
from ..exceptions import EnumerationError, EnumerationErrorKind


# A tree is a dict: name -> int (file size) or dict (subdirectory)
TreeSpec = Dict[str, Union[int, 'TreeSpec']]


class MemoryEnumerator(DirectoryEnumerator):
    """Enumerator over an in-memory tree.

    Example:
        tree = {'a.log': 10, 'sub': {'b.log': 5}}
        enumerator = MemoryEnumerator('/root', tree)
        enumerator.fail('/root/sub', EnumerationErrorKind.ACCESS_DENIED)
    """

    def __init__(
        self,
        root: str,
        tree: TreeSpec,
        yield_control: bool = True,
        shuffle_seed: Optional[int] = None
    ):
        """Initialize the enumerator.

        Args:
            root: Path the tree is mounted at
            tree: Nested dict describing the tree
            yield_control: Sleep(0) between entries so sibling tasks interleave
            shuffle_seed: If set, randomise scheduling delays reproducibly
        """
        self.root = root
        self.yield_control = yield_control
        self._random = random.Random(shuffle_seed) if shuffle_seed is not None else None
        self._directories: Dict[str, TreeSpec] = {}
        self._failures: Dict[str, Any] = {}
        self.enumerated: List[str] = []
        self._index(root, tree)

    def _index(self, path: str, tree: TreeSpec) -> None:
        self._directories[path] = tree
        for name, value in tree.items():
            if isinstance(value, dict):
                self._index(os.path.join(path, name), value)

    def fail(
        self,
        path: str,
        kind: EnumerationErrorKind = EnumerationErrorKind.ACCESS_DENIED,
        after: int = 0,
        error: Optional[BaseException] = None
    ) -> None:
        """Make enumeration of ``path`` fail.

        Args:
            path: Directory that should fail
            kind: Error kind to raise
            after: Number of entries yielded before the failure
            error: Raise this exception instead of an EnumerationError
        """
        self._failures[path] = (kind, after, error)

    async def enumerate(self, path: str) -> AsyncIterator[Entry]:
        self.enumerated.append(path)
        failure = self._failures.get(path)
        tree = self._directories.get(path)
        if tree is None and failure is None:
            raise EnumerationError(path, EnumerationErrorKind.OTHER,
                                   FileNotFoundError(f"No such directory: {path}"))

        yielded = 0
        for name, value in (tree or {}).items():
            if failure is not None and yielded >= failure[1]:
                break
            await self._pause()
            if isinstance(value, dict):
                yield Entry(name, True, 0)
            else:
                yield Entry(name, False, value)
            yielded += 1

        if failure is not None:
            kind, _, error = failure
            if error is not None:
                raise error
            raise EnumerationError(path, kind, PermissionError(f"Access denied: {path}"))

    async def _pause(self) -> None:
        if self._random is not None:
            await asyncio.sleep(self._random.random() / 1000)
        elif self.yield_control:
            await asyncio.sleep(0)


class CountingStream(io.StringIO):
    """StringIO that remembers how many write calls it received."""

    def __init__(self):
        super().__init__()
        self.write_calls = 0

    def write(self, s: str) -> int:
        self.write_calls += 1
        return super().write(s)

    def lines(self) -> List[str]:
        """Split the output on the newline each batch line ends with.

        Other line separators, such as carriage return or U+2028, are valid
        in file names and stay part of the line.
        """
        text = self.getvalue()
        return text.split("\n")[:-1] if text else []


def build_tree(root: Union[str, Path], tree: TreeSpec) -> Path:
    """Create ``tree`` on disk under ``root``.

    File values are sizes in bytes; the files are filled with that many
    ``x`` characters.

    Returns:
        The root path
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    for name, value in tree.items():
        target = root / name
        if isinstance(value, dict):
            build_tree(target, value)
        else:
            target.write_bytes(b'x' * value)
    return root


def expected_counts(tree: TreeSpec) -> Dict[str, int]:
    """Compute the statistics a full scan of ``tree`` must produce.

    Returns:
        Dictionary with files_scanned, directories_scanned and
        total_bytes_scanned
    """
    counts = {'files_scanned': 0, 'directories_scanned': 0, 'total_bytes_scanned': 0}
    for value in tree.values():
        if isinstance(value, dict):
            counts['directories_scanned'] += 1
            for key, n in expected_counts(value).items():
                counts[key] += n
        else:
            counts['files_scanned'] += 1
            counts['total_bytes_scanned'] += value
    return counts


def relative_matches(paths: List[str], root: Union[str, Path]) -> Set[str]:
    """Turn matched paths into a set of '/'-separated root-relative paths."""
    root = os.fspath(root)
    return {os.path.relpath(p, root).replace(os.sep, '/') for p in paths}
