#!/usr/bin/env python3
"""
HLCOLOR COLORIZER SUITE
-----------------------
Covers match scanning, segment interleaving, and the grep /
matches-only output policies of the line engine.
"""

import re

import pytest

from hlcolor.core.colorizer import LineColorizer, colorize_line, scan_matches
from hlcolor.core.palette import COLOR_RESET, color_of, color_start
from hlcolor.core.patterns import BUILTIN_PATTERNS

SGR = re.compile(rb"\x1b\[(?:38;5;\d+|0)m")


def paint(text: bytes) -> bytes:
    return color_start(color_of(text)) + text + COLOR_RESET


def strip_sgr(data: bytes) -> bytes:
    return SGR.sub(b"", data)


# --- Concrete "Hello" scenarios ---

def test_no_match_default_mode_returns_line():
    assert colorize_line(b"Hello", re.compile(b"xxx")) == (b"Hello", True)


def test_single_match_is_wrapped_between_literals():
    out, emit = colorize_line(b"Hello", re.compile(b"ell"))
    assert emit is True
    assert out == b"H" + paint(b"ell") + b"o"
    assert out.count(b"\x1b[38;5;") == 1
    assert out.count(COLOR_RESET) == 1


def test_repeated_match_gets_separate_pairs_same_color():
    out, emit = colorize_line(b"Hello", re.compile(b"l"))
    assert emit is True
    assert out == b"He" + paint(b"l") + paint(b"l") + b"o"
    assert out.count(color_start(color_of(b"l"))) == 2


def test_no_match_grep_mode_suppresses():
    assert colorize_line(b"Hello", re.compile(b"xxx"), grep=True) == (b"", False)


def test_matches_only_drops_literals():
    out, emit = colorize_line(b"Hello", re.compile(b"l"), matches_only=True)
    assert emit is True
    assert out == paint(b"l") + paint(b"l")


def test_matches_only_suppresses_non_matching_line_without_grep_flag():
    assert colorize_line(b"Hello", re.compile(b"xxx"), matches_only=True) == (b"", False)


# --- Properties over a small corpus ---

CORPUS = [
    (b"GET /api/v1/users 200 12ms", rb"\d+"),
    (b"ERROR: disk full; ERROR: retrying", rb"ERROR"),
    (b"  leading and trailing  ", rb"\w+"),
    (b"tab\tseparated\tvalues", rb"\t"),
    (b"\xff\xfe raw bytes \x00 inside", rb"raw|\x00"),
    (b"crlf line\r", rb"line"),
]


@pytest.mark.parametrize("line,expr", CORPUS)
def test_content_preserved_after_stripping_colors(line, expr):
    """CONTENT PRESERVATION: colors never alter or drop literal bytes."""
    out, emit = colorize_line(line, re.compile(expr))
    assert emit is True
    assert strip_sgr(out) == line


@pytest.mark.parametrize("line,expr", CORPUS)
def test_matches_only_is_concatenation_of_matches(line, expr):
    pattern = re.compile(expr)
    out, emit = colorize_line(line, pattern, matches_only=True)
    assert emit is True
    assert strip_sgr(out) == b"".join(m.group() for m in pattern.finditer(line))


@pytest.mark.parametrize("grep,matches_only", [(False, False), (True, False), (False, True)])
def test_same_text_same_color_regardless_of_position(grep, matches_only):
    out, _ = colorize_line(b"id=7 and later id=7", re.compile(rb"id=7"), grep, matches_only)
    starts = re.findall(rb"\x1b\[38;5;(\d+)m", out)
    assert len(starts) == 2 and starts[0] == starts[1]


# --- Empty lines and zero-length matches ---

def test_empty_line_is_emitted_empty_not_suppressed():
    assert colorize_line(b"", re.compile(b"x")) == (b"", True)
    assert colorize_line(b"", re.compile(b"x"), grep=True) == (b"", False)


def test_zero_length_matches_advance_and_are_painted():
    """a* matches empty at 0, 'aa' at 1, and empty again at the end."""
    pattern = re.compile(b"a*")
    spans = [(m.start, m.end) for m in scan_matches(b"baa", pattern)]
    assert spans == [(0, 0), (1, 3), (3, 3)]

    out, emit = colorize_line(b"baa", pattern)
    assert emit is True
    assert out == paint(b"") + b"b" + paint(b"aa") + paint(b"")
    assert strip_sgr(out) == b"baa"


def test_zero_length_only_pattern_terminates():
    spans = [(m.start, m.end) for m in scan_matches(b"abc", re.compile(b""))]
    assert spans == [(0, 0), (1, 1), (2, 2), (3, 3)]


def test_zero_length_match_on_empty_line():
    assert colorize_line(b"", re.compile(b"a*")) == (paint(b""), True)


def test_word_boundaries_see_text_before_resume_point():
    """Resuming a scan mid-line must not treat the offset as a line start."""
    out, _ = colorize_line(b"12 x34 56", re.compile(BUILTIN_PATTERNS["decimal"].encode()), matches_only=True)
    assert strip_sgr(out) == b"1256"
    assert out == paint(b"12") + paint(b"56")


# --- Built-in patterns ---

def test_hex_builtin():
    pattern = re.compile(BUILTIN_PATTERNS["hex"].encode())
    found = [m.text for m in scan_matches(b"value 0xdeadbeef and ff", pattern)]
    assert found == [b"0xdeadbeef", b"ff"]


def test_words_builtin():
    pattern = re.compile(BUILTIN_PATTERNS["words"].encode())
    found = [m.text for m in scan_matches(b"foo, bar_baz!", pattern)]
    assert found == [b"foo", b"bar_baz"]


# --- Buffer reuse ---

def test_colorize_into_reuses_caller_buffer():
    colorizer = LineColorizer(re.compile(b"o"))
    scratch = bytearray(b"stale content")

    assert colorizer.colorize_into(b"foo", scratch) == 2
    assert bytes(scratch) == b"f" + paint(b"o") + paint(b"o")

    assert colorizer.colorize_into(b"xyz", scratch) == 0
    assert bytes(scratch) == b"xyz"


def test_grep_colorizer_clears_buffer_on_suppression():
    colorizer = LineColorizer(re.compile(b"o"), grep=True)
    scratch = bytearray(b"leftover")
    assert colorizer.colorize_into(b"xyz", scratch) is None
    assert scratch == bytearray()


def test_colorize_into_keeps_three_outcomes_apart():
    """Suppressed, emitted empty, and emitted non-empty are all distinguishable."""
    scratch = bytearray()
    grep = LineColorizer(re.compile(b"x"), grep=True)
    plain = LineColorizer(re.compile(b"x"))

    assert grep.colorize_into(b"", scratch) is None
    assert plain.colorize_into(b"", scratch) == 0 and scratch == bytearray()
    assert plain.colorize_into(b"axa", scratch) == 1 and len(scratch) > 3
