#!/usr/bin/env python3
"""
HLCOLOR COLORIZER - The Line Engine
-----------------------------------
Scans a single line for non-overlapping matches and rebuilds it with
every match wrapped in its content-derived color. The grep and
matches-only policies are enforced here, line by line.

The hot path (colorize_into) writes into a caller-owned bytearray so the
stream processor can reuse one scratch buffer for the whole run.

Author: HLColor Team
Date: 2026-10-19
"""

from typing import Iterator, Optional, Pattern, Tuple

from hlcolor.core.models import Match
from hlcolor.core.palette import COLOR_RESET, color_of, color_start


def scan_matches(line: bytes, pattern: Pattern[bytes]) -> Iterator[Match]:
    """
    Yields non-overlapping matches left to right.

    Each search resumes at the end of the previous match. A zero-length
    match still yields, but the next search starts one byte further so
    the scan always terminates.
    """
    pos = 0
    length = len(line)
    while pos <= length:
        found = pattern.search(line, pos)
        if found is None:
            return
        start, end = found.span()
        yield Match(start, end, found.group())
        pos = end if end > start else end + 1


class LineColorizer:
    """
    Applies one compiled pattern and one output policy to many lines.
    """

    def __init__(self, pattern: Pattern[bytes], grep: bool = False, matches_only: bool = False):
        self.pattern = pattern
        self.matches_only = matches_only
        # matches-only suppresses non-matching lines as well
        self.grep = grep or matches_only

    def colorize_into(self, line: bytes, out: bytearray) -> Optional[int]:
        """
        Clears out, fills it with the rendered line, and returns the number
        of matches painted.

        None means "suppressed"; 0 means the line is emitted unchanged, and
        an empty buffer with a non-None result is an emitted empty line.
        """
        out.clear()
        cursor = 0
        count = 0

        for match in scan_matches(line, self.pattern):
            count += 1
            # Literal text between the previous match and this one
            if not self.matches_only:
                out += line[cursor:match.start]
            out += color_start(color_of(match.text))
            out += match.text
            out += COLOR_RESET
            cursor = match.end

        if count == 0:
            if self.grep:
                return None
            out += line
            return 0

        # Everything after the last match
        if not self.matches_only:
            out += line[cursor:]
        return count

    def colorize(self, line: bytes) -> Tuple[bytes, bool]:
        """Convenience wrapper returning (output, emit) with a fresh buffer."""
        out = bytearray()
        count = self.colorize_into(line, out)
        return bytes(out), count is not None


def colorize_line(line: bytes, pattern: Pattern[bytes], grep: bool = False,
                  matches_only: bool = False) -> Tuple[bytes, bool]:
    """Colorizes a single line. Returns (b"", False) when the line is suppressed."""
    return LineColorizer(pattern, grep=grep, matches_only=matches_only).colorize(line)
