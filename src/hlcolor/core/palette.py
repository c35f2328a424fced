#!/usr/bin/env python3
"""
HLCOLOR PALETTE - Color Assigner
--------------------------------
Maps matched text to a stable entry of the 256-color ANSI palette.
The low 16 indices (remapped by most terminal themes) and the top 40
(greyscale ramp and near-white) are skipped, leaving 200 usable colors.

Author: HLColor Team
Date: 2026-10-19
"""

from functools import lru_cache
from typing import List

PALETTE_BASE = 16
PALETTE_SIZE = 200

COLOR_RESET = b"\x1b[0m"

# CRC-16/DECT-X: poly 0x0589, init 0, no reflection, no final xor
_CRC16_POLY = 0x0589


def _build_crc_table() -> List[int]:
    table = []
    for byte in range(256):
        crc = byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ _CRC16_POLY) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
        table.append(crc)
    return table


_CRC_TABLE = _build_crc_table()

# Pre-rendered "ESC[38;5;<N>m" for every palette index
_COLOR_STARTS = [b"\x1b[38;5;%dm" % index for index in range(256)]


def crc16_dect_x(data: bytes) -> int:
    """Computes the CRC-16/DECT-X checksum of data."""
    crc = 0
    for byte in data:
        crc = ((crc << 8) & 0xFFFF) ^ _CRC_TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc


@lru_cache(maxsize=4096)
def color_of(text: bytes) -> int:
    """
    Returns the palette index for a matched substring.

    Only the content matters: the same bytes get the same color anywhere
    in the stream and across runs. Different substrings may collide.
    """
    return (crc16_dect_x(text) & 0xFF) % PALETTE_SIZE + PALETTE_BASE


def color_start(color: int) -> bytes:
    """SGR sequence that switches the foreground to the given palette index."""
    return _COLOR_STARTS[color]
