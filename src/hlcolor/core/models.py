#!/usr/bin/env python3
"""
HLCOLOR CORE MODELS
-------------------
Defines the small value types that flow through the colorization engine.
All of them are transient: they live for one line or one run, never longer.

Author: HLColor Team
Date: 2026-10-19
"""

from dataclasses import dataclass

# Output accumulator size at which the stream processor writes to the sink
DEFAULT_FLUSH_THRESHOLD = 64 * 1024


@dataclass(frozen=True)
class Match:
    """
    One occurrence of the pattern inside a line.

    Offsets are byte offsets into the line (half-open range), so
    line[start:end] == text always holds.
    """
    start: int      # First byte of the match
    end: int        # One past the last byte of the match
    text: bytes     # The matched bytes themselves


@dataclass
class HighlightConfig:
    """
    Run configuration assembled by the CLI (or by a library caller).

    matches_only is the stronger mode: it implies grep, so the flag is
    normalized here once and every downstream component can trust it.
    """
    pattern: str
    grep: bool = False
    matches_only: bool = False
    line_buffered: bool = False
    flush_threshold: int = DEFAULT_FLUSH_THRESHOLD

    def __post_init__(self):
        if self.matches_only:
            self.grep = True
        if self.flush_threshold <= 0:
            raise ValueError(f"flush_threshold must be positive, got {self.flush_threshold}")


@dataclass
class StreamStats:
    """Counters reported at the end of a stream run."""
    lines_read: int = 0
    lines_emitted: int = 0
    matches: int = 0
    bytes_written: int = 0
    flushes: int = 0
