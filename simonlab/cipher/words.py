"""Word-level helpers: masks, rotations and the little-endian byte codec.

SIMON works on 32-bit or 64-bit unsigned words. Python integers are
unbounded, so every operation here masks back to the word width.
"""

from __future__ import annotations

import struct
from typing import Iterable, List

from .errors import MalformedInput

_STRUCT_CODES = {4: "I", 8: "Q"}


def word_mask(w: int) -> int:
    """All-ones mask for a w-bit word."""
    return (1 << w) - 1


def rotate_left(x: int, r: int, w: int) -> int:
    """Rotate-left x by r bits in a w-bit word."""
    mask = word_mask(w)
    r %= w
    x &= mask
    return ((x << r) & mask) | (x >> (w - r))


def rotate_right(x: int, r: int, w: int) -> int:
    """Rotate-right x by r bits in a w-bit word."""
    mask = word_mask(w)
    r %= w
    x &= mask
    return (x >> r) | ((x << (w - r)) & mask)


def bytes_to_words(data: bytes, word_size: int = 4) -> List[int]:
    """Convert a byte buffer to words, least-significant byte first.

    Args:
        data: Buffer whose length is a multiple of ``word_size``.
        word_size: Word size in bytes (4 or 8).

    Returns:
        The decoded words, ``data[0:word_size]`` first.
    """
    if word_size not in _STRUCT_CODES:
        raise MalformedInput(f"word_size must be 4 or 8 bytes, got {word_size}")
    if len(data) % word_size != 0:
        raise MalformedInput(
            f"Buffer of {len(data)} bytes is not a whole number of {word_size}-byte words"
        )
    fmt = "<" + _STRUCT_CODES[word_size] * (len(data) // word_size)
    return list(struct.unpack(fmt, data))


def words_to_bytes(words: Iterable[int], word_size: int = 4) -> bytes:
    """Convert words back to bytes, least-significant byte first."""
    if word_size not in _STRUCT_CODES:
        raise MalformedInput(f"word_size must be 4 or 8 bytes, got {word_size}")
    words = list(words)
    fmt = "<" + _STRUCT_CODES[word_size] * len(words)
    try:
        return struct.pack(fmt, *words)
    except struct.error as exc:
        raise MalformedInput(f"Word out of range for {word_size * 8}-bit packing: {exc}") from exc
