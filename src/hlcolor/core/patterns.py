#!/usr/bin/env python3
"""
HLCOLOR PATTERNS - Pattern Selection & Compilation
--------------------------------------------------
Resolves the active pattern from an explicit expression or one of the
built-in shortcuts, and compiles it into a bytes regex so lines never
need to be decoded.

Author: HLColor Team
Date: 2026-10-19
"""

import os
import re
from typing import Dict, Optional, Pattern

# Built-in shortcuts exposed by the CLI (-d / -w / -x)
BUILTIN_PATTERNS: Dict[str, str] = {
    "decimal": r"\b\d+\b",
    "words": r"\w+",
    "hex": r"0x[a-fA-F0-9]{2,}|[a-fA-F0-9]{2,}",
}


class PatternError(ValueError):
    """Raised when the pattern selection is missing, ambiguous, or unparseable."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Cannot parse regex pattern '{pattern}': {reason}")


def select_pattern(explicit: Optional[str] = None, builtin: Optional[str] = None) -> str:
    """
    Returns the single active pattern string.

    Exactly one source must be given. An empty explicit pattern counts as
    no pattern at all: it would match the empty string at every offset.
    """
    if explicit is not None and builtin is not None:
        raise PatternError(explicit, f"conflicts with built-in pattern '{builtin}'")
    if builtin is not None:
        if builtin not in BUILTIN_PATTERNS:
            raise PatternError(builtin, "unknown built-in pattern")
        return BUILTIN_PATTERNS[builtin]
    if not explicit:
        raise PatternError("", "no pattern selected")
    return explicit


def compile_pattern(pattern: str) -> Pattern[bytes]:
    """
    Compiles a pattern string into a bytes regex.

    os.fsencode keeps arguments that arrived with undecodable bytes
    (surrogateescape) byte-identical to what the shell passed in.
    """
    try:
        return re.compile(os.fsencode(pattern))
    except re.error as e:
        raise PatternError(pattern, str(e)) from e
