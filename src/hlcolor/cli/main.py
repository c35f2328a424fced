#!/usr/bin/env python3
"""
HLCOLOR CLI - Pipeline Entry Point
----------------------------------
Translates command-line flags into a HighlightConfig, wires stdin and
stdout to the stream processor, and maps failures to exit codes.

Exit codes:
  0  input exhausted normally
  1  invalid pattern, I/O failure, or interruption
  2  missing or ambiguous pattern selection (usage error)

Author: HLColor Team
Date: 2026-10-19
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from hlcolor.cli.formatter import DiagnosticFormatter
from hlcolor.core.models import HighlightConfig
from hlcolor.core.patterns import PatternError, select_pattern
from hlcolor.core.stream import StreamError, StreamWriteError, process_stream

VERSION = "1.0.0"

logger = logging.getLogger("hlcolor.cli")


class HLColorCLI:
    """
    CLI wrapper that turns user flags into a single stream run.
    """

    def __init__(self):
        self.parser = argparse.ArgumentParser(
            prog="colorize",
            description="Highlight regex matches in stdin, one stable color per distinct match.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                "examples:\n"
                "  tail -f app.log | colorize -p 'ERROR|WARN'\n"
                "  dmesg | colorize -x -g\n"
                "  cat trace.txt | colorize -d -m"
            ),
        )
        self.formatter = DiagnosticFormatter()
        self._setup_args()

    def _setup_args(self):
        """Configures pattern sources (exactly one) and output modes."""
        source = self.parser.add_mutually_exclusive_group(required=True)
        source.add_argument("-p", "--pattern", help="Regex pattern to highlight")
        source.add_argument("-d", "--decimalnumbers", dest="builtin", action="store_const",
                            const="decimal", help="Highlight decimal numbers")
        source.add_argument("-w", "--words", dest="builtin", action="store_const",
                            const="words", help="Highlight (regex) words")
        source.add_argument("-x", "--hexnumbers", dest="builtin", action="store_const",
                            const="hex", help="Highlight hex numbers")

        self.parser.add_argument("-g", "--grep", action="store_true", help="Only print matching lines")
        self.parser.add_argument("-m", "--matchesonly", action="store_true",
                                 help="Only print matches (implies --grep)")
        self.parser.add_argument("--line-buffered", action="store_true",
                                 help="Flush output after every line")
        self.parser.add_argument("--stats", action="store_true", help="Print a run summary to stderr")
        self.parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
        self.parser.add_argument("--version", action="version", version=f"colorize v{VERSION}")

    def build_config(self, args: argparse.Namespace) -> HighlightConfig:
        """Resolves the pattern source; an empty -p is a usage error."""
        try:
            pattern = select_pattern(explicit=args.pattern, builtin=args.builtin)
        except PatternError as e:
            self.parser.error(e.reason)
        return HighlightConfig(
            pattern=pattern,
            grep=args.grep,
            matches_only=args.matchesonly,
            # Interactive terminals see each line as it arrives
            line_buffered=args.line_buffered or _stdout_is_terminal(),
        )

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Parses flags, runs the stream, and returns the exit status."""
        args = self.parser.parse_args(argv)
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.WARNING,
            format="%(name)s: %(message)s",
            stream=sys.stderr,
        )
        logging.getLogger("hlcolor").setLevel(logging.DEBUG if args.verbose else logging.WARNING)
        config = self.build_config(args)
        logger.debug("Active pattern: %r (grep=%s, matches_only=%s)",
                     config.pattern, config.grep, config.matches_only)

        try:
            stats = process_stream(sys.stdin.buffer, sys.stdout.buffer, config)
        except PatternError as e:
            self.formatter.pattern_error(e)
            return 1
        except StreamWriteError as e:
            if isinstance(e.__cause__, BrokenPipeError):
                # Downstream closed (e.g. `| head`); silence the shutdown flush
                _detach_stdout()
                return 1
            self.formatter.stream_error(e)
            return 1
        except StreamError as e:
            self.formatter.stream_error(e)
            return 1

        if args.stats:
            self.formatter.summary(stats)
        return 0


def _stdout_is_terminal() -> bool:
    try:
        return sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def _detach_stdout():
    """Points stdout's descriptor at /dev/null so the interpreter's final flush cannot fail."""
    try:
        fd = sys.stdout.fileno()
    except (OSError, ValueError):
        # Replaced stdout without a descriptor; nothing left to silence
        return
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, fd)
    finally:
        os.close(devnull)


def main():
    """Application entry point with interrupt handling."""
    cli = HLColorCLI()
    try:
        sys.exit(cli.run())
    except KeyboardInterrupt:
        cli.formatter.interrupted()
        sys.exit(1)


if __name__ == "__main__":
    main()
