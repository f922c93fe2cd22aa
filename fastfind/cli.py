"""
Command-line interface for FastFind.

Usage:
    fastfind [options] PATTERN [PATTERN ...]

Examples:
    fastfind *.log                   # Wildcard search from the current directory
    fastfind -p /srv -i build*       # Match directories too (full paths)
    fastfind -r "^img_\\d+\\.jpe?g$"   # Regular expression search
"""

import argparse
import os
import sys
import time
from dataclasses import replace
from typing import List, Optional, TextIO

from . import __version__
from .api import search
from .config import SearchConfig
from .core import StatisticsSnapshot
from .error_policies import create_error_policy
from .exceptions import ConfigurationError


EXIT_OK = 0
EXIT_USAGE = 1


class UsageError(Exception):
    """Raised instead of argparse's default exit on bad arguments."""


class FastFindArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors with exit code 1, not 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> FastFindArgumentParser:
    parser = FastFindArgumentParser(
        prog='fastfind',
        description='Fast concurrent file finder. Patterns are DOS wildcards '
                    '(* and ?) unless --regex is given; matching ignores case.',
    )
    parser.add_argument('patterns', nargs='*', metavar='PATTERN',
                        help='Name pattern(s) to search for')
    parser.add_argument('-p', '--path', default=None,
                        help='Directory to search (default: current directory)')
    parser.add_argument('-r', '--regex', action='store_true',
                        help='Treat patterns as regular expressions')
    parser.add_argument('-i', '--include-dirs', dest='include_directories', action='store_true',
                        help='Also match directories; matches against full paths')
    parser.add_argument('-n', '--no-stats', dest='no_statistics', action='store_true',
                        help='Do not print statistics at the end')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Warn about directories that could not be read')
    parser.add_argument('-j', '--max-concurrent', type=int, default=None,
                        help='Maximum directories enumerated at once')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def parse_config(args: argparse.Namespace) -> SearchConfig:
    """Turn parsed arguments into a validated SearchConfig.

    Raises:
        ConfigurationError: If the path or patterns are unusable
    """
    if not args.patterns:
        raise ConfigurationError(["No patterns specified"])

    root = args.path if args.path is not None else os.getcwd()
    if not os.path.isdir(root):
        raise ConfigurationError([f"The path '{root}' does not exist or is not a directory"])

    config = SearchConfig.from_raw(
        root,
        args.patterns,
        regex=args.regex,
        include_directories=args.include_directories,
    )
    if args.max_concurrent is not None:
        config = replace(
            config,
            performance=replace(config.performance, max_concurrent=args.max_concurrent),
        )

    problems = config.validate()
    if problems:
        raise ConfigurationError(problems)
    return config


def format_statistics(stats: StatisticsSnapshot, elapsed_ms: float) -> str:
    """Render the end-of-run summary."""
    lines = [
        f"Total time:        {elapsed_ms:,.0f} ms",
        f"Total files:       {stats.files_scanned:,}",
        f"Total directories: {stats.directories_scanned:,}",
        f"Total bytes:       {stats.total_bytes_scanned:,}",
        f"Total matches:     {stats.match_count:,}",
        f"Matched bytes:     {stats.match_bytes_total:,}",
    ]
    if stats.directories_skipped:
        lines.append(f"Skipped dirs:      {stats.directories_skipped:,}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None, stdout: Optional[TextIO] = None) -> int:
    """Entry point for the fastfind command.

    Returns:
        0 on success, 1 on invalid command line or configuration
    """
    stdout = stdout if stdout is not None else sys.stdout
    parser = build_parser()

    # Timing includes parsing and compiling the patterns
    start = time.perf_counter()

    try:
        args = parser.parse_args(argv)
        config = parse_config(args)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        for problem in e.problems:
            print(f"ERROR: {problem}", file=sys.stderr)
        return EXIT_USAGE

    policy = create_error_policy(verbose=args.verbose)
    stats = search(config, output=stdout, error_policy=policy)

    elapsed_ms = (time.perf_counter() - start) * 1000
    if not args.no_statistics:
        print(format_statistics(stats, elapsed_ms), file=stdout)

    return EXIT_OK


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
