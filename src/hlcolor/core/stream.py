#!/usr/bin/env python3
"""
HLCOLOR STREAM PROCESSOR - The Conveyor
---------------------------------------
Pulls lines from the input, pushes each one through the LineColorizer,
and batches the results in a single reusable output buffer that is
written to the sink whenever it fills up, and once more at the end.

Single-threaded and pull-based: a line is fully processed before the
next one is read. Nothing here is shared, so nothing is locked.

Author: HLColor Team
Date: 2026-10-19
"""

import logging
from typing import BinaryIO, Iterable, Iterator, Pattern

from hlcolor.core.colorizer import LineColorizer
from hlcolor.core.models import DEFAULT_FLUSH_THRESHOLD, HighlightConfig, StreamStats
from hlcolor.core.patterns import compile_pattern

logger = logging.getLogger("hlcolor.stream")


class StreamError(IOError):
    """Base class for fatal I/O failures during a run."""


class StreamReadError(StreamError):
    """The input stream could not be read."""


class StreamWriteError(StreamError):
    """The output sink rejected a write."""


def iter_lines(source: BinaryIO) -> Iterator[bytes]:
    """
    Yields newline-stripped records from a binary stream.

    The last record is yielded even without a trailing newline; binary
    iteration never produces an empty trailing record, so an input ending
    in '\\n' does not gain a phantom blank line.
    """
    try:
        for record in source:
            if record.endswith(b"\n"):
                yield record[:-1]
            else:
                yield record
    except OSError as e:
        raise StreamReadError(f"Failed to read input: {e}") from e


class OutputBuffer:
    """
    Accumulates rendered lines and writes them to the sink in batches.
    The same bytearray is cleared and refilled for the whole run.
    """

    def __init__(self, sink: BinaryIO, threshold: int = DEFAULT_FLUSH_THRESHOLD):
        self.sink = sink
        self.threshold = threshold
        self.buffer = bytearray()
        self.bytes_written = 0
        self.flushes = 0

    def __len__(self) -> int:
        return len(self.buffer)

    def append(self, content: bytes) -> None:
        """Appends one line plus its newline, flushing once the threshold is reached."""
        self.buffer += content
        self.buffer += b"\n"
        if len(self.buffer) >= self.threshold:
            self.flush()

    def flush(self) -> None:
        """Writes out and clears the buffer. An empty buffer is a no-op."""
        if not self.buffer:
            return

        size = len(self.buffer)
        try:
            self.sink.write(self.buffer)
            if hasattr(self.sink, "flush"):
                self.sink.flush()
        except OSError as e:
            raise StreamWriteError(f"Failed to write output: {e}") from e
        finally:
            # Unflushed output is dropped on failure; the run is over anyway
            self.buffer.clear()

        self.bytes_written += size
        self.flushes += 1
        logger.debug("Flushed %d bytes to output", size)


class StreamProcessor:
    """
    Drives a sequence of lines through the colorizer into the sink.
    Owns the scratch and output buffers for the duration of a run.
    """

    def __init__(self, pattern: Pattern[bytes], sink: BinaryIO, grep: bool = False,
                 matches_only: bool = False, line_buffered: bool = False,
                 flush_threshold: int = DEFAULT_FLUSH_THRESHOLD):
        self.colorizer = LineColorizer(pattern, grep=grep, matches_only=matches_only)
        self.output = OutputBuffer(sink, threshold=flush_threshold)
        self.line_buffered = line_buffered
        self.scratch = bytearray()

    @classmethod
    def from_config(cls, config: HighlightConfig, sink: BinaryIO) -> "StreamProcessor":
        """Builds a processor from a HighlightConfig, compiling its pattern."""
        return cls(
            compile_pattern(config.pattern),
            sink,
            grep=config.grep,
            matches_only=config.matches_only,
            line_buffered=config.line_buffered,
            flush_threshold=config.flush_threshold,
        )

    def process(self, lines: Iterable[bytes]) -> StreamStats:
        """
        Processes every line, then flushes unconditionally.
        Write failures propagate immediately as StreamWriteError.
        """
        stats = StreamStats()
        colorizer = self.colorizer
        output = self.output
        scratch = self.scratch

        for line in lines:
            stats.lines_read += 1
            count = colorizer.colorize_into(line, scratch)
            if count is None:
                continue

            stats.lines_emitted += 1
            stats.matches += count
            output.append(scratch)
            if self.line_buffered:
                output.flush()

        output.flush()

        stats.bytes_written = output.bytes_written
        stats.flushes = output.flushes
        logger.debug(
            "Stream complete: %d lines read, %d emitted, %d matches, %d bytes in %d flushes",
            stats.lines_read, stats.lines_emitted, stats.matches,
            stats.bytes_written, stats.flushes,
        )
        return stats


def process_stream(source: BinaryIO, sink: BinaryIO, config: HighlightConfig) -> StreamStats:
    """
    Single entry point: compile the configured pattern, then colorize
    source into sink. PatternError is raised before any input is read.
    """
    processor = StreamProcessor.from_config(config, sink)
    return processor.process(iter_lines(source))
