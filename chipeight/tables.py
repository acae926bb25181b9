"""Fixed tables of the CHIP-8 machine: the hex font and the keypad layout."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

NO_KEY = 0xFF
"""Value reported when no keypad key is pressed."""

FONT_GLYPH_HEIGHT = 5
"""Number of bytes, one per row, in each font glyph."""

FONT = bytes(
    [
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    ]
)
"""The sixteen hexadecimal digit glyphs, loaded at address 0."""

KEYPAD: Mapping[str, int] = MappingProxyType(
    {
        "1": 0x1,
        "2": 0x2,
        "3": 0x3,
        "4": 0xC,
        "q": 0x4,
        "w": 0x5,
        "e": 0x6,
        "r": 0xD,
        "a": 0x7,
        "s": 0x8,
        "d": 0x9,
        "f": 0xE,
        "z": 0xA,
        "x": 0x0,
        "c": 0xB,
        "v": 0xF,
    }
)
"""Keyboard key names mapped onto the sixteen keypad values."""


def key_to_hex(key: str) -> int:
    """Return the keypad value for a keyboard key name, or NO_KEY if unmapped."""
    return KEYPAD.get(key.lower(), NO_KEY)