"""Name pattern compilation for FastFind.

Patterns come in two flavours: DOS-style wildcards (``*`` and ``?``) and
raw regular expressions. Both compile down to a case-insensitive ``re``
pattern so the traversal engine only ever deals with one kind of matcher.
"""

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from .exceptions import PatternCompileError


def wildcard_to_regex(raw: str) -> str:
    """Translate a DOS wildcard into an anchored regular expression.

    All regex metacharacters are escaped first, then ``*`` is reinstated
    as "any run of characters" and ``?`` as "any single character".

    Args:
        raw: Wildcard pattern such as ``*.log`` or ``file?.txt``

    Returns:
        Regular expression string anchored at both ends
    """
    escaped = re.escape(raw)
    escaped = escaped.replace(r'\*', '.*').replace(r'\?', '.')
    return f"^{escaped}$"


class Pattern:
    """A compiled, case-insensitive name matcher.

    Instances are immutable once built and safe to share between any
    number of concurrent workers.
    """

    __slots__ = ('raw', 'regex_mode', 'expression', '_compiled', '_match')

    def __init__(self, raw: str, regex_mode: bool = False):
        """Compile a raw user pattern.

        Args:
            raw: Pattern text as the user typed it
            regex_mode: If True, ``raw`` is a regular expression used verbatim.
                        If False, ``raw`` is a DOS wildcard.

        Raises:
            PatternCompileError: If the resulting expression is not valid
        """
        self.raw = raw
        self.regex_mode = regex_mode
        self.expression = raw if regex_mode else wildcard_to_regex(raw)
        try:
            if regex_mode:
                self._compiled = re.compile(self.expression, re.IGNORECASE)
                self._match = self._compiled.search
            else:
                # Wildcards must consume the whole name, newlines included
                self._compiled = re.compile(self.expression, re.IGNORECASE | re.DOTALL)
                self._match = self._compiled.fullmatch
        except re.error as e:
            raise PatternCompileError(raw, str(e)) from e

    def matches(self, name: str) -> bool:
        """Check whether ``name`` satisfies this pattern."""
        return self._match(name) is not None

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return (self.raw, self.regex_mode) == (other.raw, other.regex_mode)

    def __hash__(self) -> int:
        return hash((self.raw, self.regex_mode))

    def __repr__(self) -> str:
        mode = 'regex' if self.regex_mode else 'wildcard'
        return f"Pattern({self.raw!r}, {mode})"


class PatternSet:
    """Ordered collection of patterns combined with logical OR."""

    __slots__ = ('_patterns',)

    def __init__(self, patterns: Iterable[Pattern] = ()):
        self._patterns: Tuple[Pattern, ...] = tuple(patterns)

    def matches(self, name: str) -> bool:
        """True if any pattern matches, checked in declaration order."""
        for pattern in self._patterns:
            if pattern.matches(name):
                return True
        return False

    def first_match(self, name: str) -> Optional[Pattern]:
        """Return the first pattern that matches ``name``, if any."""
        for pattern in self._patterns:
            if pattern.matches(name):
                return pattern
        return None

    @property
    def raw_patterns(self) -> List[str]:
        return [p.raw for p in self._patterns]

    def __iter__(self) -> Iterator[Pattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PatternSet):
            return NotImplemented
        return self._patterns == other._patterns

    def __hash__(self) -> int:
        return hash(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet({list(self._patterns)!r})"


def compile_pattern(raw: str, regex_mode: bool = False) -> Pattern:
    """Compile a single raw pattern.

    Raises:
        PatternCompileError: If the pattern cannot be compiled
    """
    return Pattern(raw, regex_mode)


def compile_patterns(raws: Iterable[str], regex_mode: bool = False) -> PatternSet:
    """Compile every raw pattern, stopping at the first failure.

    Args:
        raws: Raw patterns in the order they should be tried
        regex_mode: Whether the patterns are regular expressions

    Returns:
        PatternSet preserving declaration order

    Raises:
        PatternCompileError: For the first pattern that fails to compile
    """
    return PatternSet(compile_pattern(raw, regex_mode) for raw in raws)
