"""Round-constant sequences for the SIMON key schedule.

Each sequence is a 62-bit periodic bit string from the SIMON paper, stored
as a 64-bit literal and read low bit first: bit ``i`` of the literal is the
constant bit mixed into the ``i``-th key-schedule update.
"""

from __future__ import annotations

from typing import Dict, Iterator

Z2 = 0x7369F885192C0EF5
Z3 = 0xFC2CE51207A635DB
Z4 = 0xFDC94C3A046D678B

SEQUENCES: Dict[str, int] = {
    "z2": Z2,
    "z3": Z3,
    "z4": Z4,
}

SEQUENCE_BITS = 64


def round_constant(word_size: int) -> int:
    """The fixed constant ``c = 2**w - 4`` (all ones except the two low bits)."""
    return ((1 << word_size) - 1) ^ 3


def round_constant_bits(variant) -> Iterator[int]:
    """Yield the constant bits consumed by one key-schedule expansion.

    One bit is produced per register update, ``rounds - key_words`` in total.
    The 128-bit variants need more updates than the literal can feed, so
    their last updates use the fixed ``closing_bits`` of the variant table
    instead of literal bits.
    """
    z = SEQUENCES[variant.sequence]
    updates = variant.rounds - variant.key_words
    from_literal = updates - len(variant.closing_bits)
    for _ in range(from_literal):
        yield z & 1
        z >>= 1
    yield from variant.closing_bits
