"""SIMON key expansion, round function and block transforms.

All functions work on words (ints) in codec order: ``key[0]`` is the least
significant key word, and for a block ``block[1]`` is the left half that
enters the round function first while ``block[0]`` is the right half.

Research / education only. Not hardened against timing side channels.
"""

from __future__ import annotations

import logging
import operator
from typing import Callable, Dict, List, Sequence, Tuple, Union

from .constants import round_constant, round_constant_bits
from .errors import MalformedInput, UnsupportedVariant
from .variants import Variant, VariantSpec, get_variant
from .words import rotate_left, rotate_right, word_mask

logger = logging.getLogger(__name__)

VariantLike = Union[VariantSpec, Variant, str]
Block = Tuple[int, int]
Schedule = Tuple[int, ...]


def round_function(x: int, word_size: int) -> int:
    """f(x) = (x <<< 1 & x <<< 8) ^ x <<< 2 over a ``word_size``-bit word."""
    return (rotate_left(x, 1, word_size) & rotate_left(x, 8, word_size)) ^ rotate_left(x, 2, word_size)


# ---------------------------------------------------------------------------
# Key schedule
# ---------------------------------------------------------------------------

def _feedback_short(regs: List[int], j: int, w: int) -> int:
    # two- and three-word keys: only the most recently updated register feeds in
    prev = regs[j - 1]
    return rotate_right(prev, 3, w) ^ rotate_right(prev, 4, w)


def _feedback_four(regs: List[int], j: int, w: int) -> int:
    prev = regs[j - 1]
    nxt = regs[(j + 1) % 4]
    return (
        rotate_right(prev, 3, w) ^ rotate_right(prev, 4, w)
        ^ nxt ^ rotate_right(nxt, 1, w)
    )


_FEEDBACK: Dict[int, Callable[[List[int], int, int], int]] = {
    2: _feedback_short,
    3: _feedback_short,
    4: _feedback_four,
}


def _check_words(words: Sequence[int], w: int, what: str) -> List[int]:
    """Validate words and return them as plain ints (numpy scalars included)."""
    mask = word_mask(w)
    out: List[int] = []
    for i, x in enumerate(words):
        try:
            if isinstance(x, bool):
                raise TypeError
            value = operator.index(x)
        except TypeError:
            raise MalformedInput(f"{what} word {i} is not an integer: {x!r}") from None
        if value < 0 or value > mask:
            raise MalformedInput(f"{what} word {i} is not a {w}-bit unsigned value: {x!r}")
        out.append(value)
    return out


def expand_key(key_words: Sequence[int], variant: VariantLike) -> Schedule:
    """Expand raw key words into the variant's round key schedule.

    The key is held in ``m`` rolling registers (A, B, C[, D]). Each step emits
    the current register as the next round key, then overwrites it with the
    register ``m`` positions ahead in the schedule. After ``rounds - m`` steps
    the registers themselves are the last ``m`` round keys.

    Args:
        key_words: ``m`` key words, least significant first.
        variant: Variant spec, tag or tag name.

    Returns:
        Tuple of ``rounds`` round keys.

    Raises:
        UnsupportedVariant: the key word count does not match the variant.
        MalformedInput: a key word is out of range for the word size.
    """
    spec = get_variant(variant)
    m = spec.key_words
    w = spec.word_size
    if len(key_words) != m:
        raise UnsupportedVariant(
            f"{spec.name} takes {m} key words, got {len(key_words)}"
        )
    key_words = _check_words(key_words, w, "key")

    c = round_constant(w)
    feedback = _FEEDBACK[m]
    regs = list(key_words)
    schedule: List[int] = []

    step = 0
    for bit in round_constant_bits(spec):
        j = step % m
        schedule.append(regs[j])
        regs[j] ^= c ^ bit ^ feedback(regs, j, w)
        step += 1

    start = step % m
    schedule.extend(regs[start:] + regs[:start])

    logger.debug("Expanded %s key into %d round keys", spec.name, len(schedule))
    return tuple(schedule)


# ---------------------------------------------------------------------------
# Block transforms
# ---------------------------------------------------------------------------

def _check_block(
    block: Sequence[int], schedule: Sequence[int], spec: VariantSpec
) -> Tuple[List[int], List[int]]:
    if len(block) != 2:
        raise MalformedInput(f"{spec.name} blocks are 2 words, got {len(block)}")
    if len(schedule) != spec.rounds:
        raise MalformedInput(
            f"{spec.name} needs {spec.rounds} round keys, got {len(schedule)}"
        )
    return (
        _check_words(block, spec.word_size, "block"),
        _check_words(schedule, spec.word_size, "round key"),
    )


def encrypt_words(block: Sequence[int], schedule: Sequence[int], variant: VariantLike) -> Block:
    """Encrypt one two-word block with an expanded schedule.

    Rounds run in pairs. SIMON128/192 has an odd round count and ends with
    one extra single round, which also swaps the halves.
    """
    spec = get_variant(variant)
    block, rk = _check_block(block, schedule, spec)
    w = spec.word_size

    right, left = block[0], block[1]
    paired = spec.rounds - spec.rounds % 2
    for i in range(0, paired, 2):
        right ^= round_function(left, w) ^ rk[i]
        left ^= round_function(right, w) ^ rk[i + 1]

    if spec.rounds % 2:
        left, right = right ^ round_function(left, w) ^ rk[paired], left

    return right, left


def decrypt_words(block: Sequence[int], schedule: Sequence[int], variant: VariantLike) -> Block:
    """Invert ``encrypt_words``: round keys are consumed from the end."""
    spec = get_variant(variant)
    block, rk = _check_block(block, schedule, spec)
    w = spec.word_size

    right, left = block[0], block[1]
    paired = spec.rounds - spec.rounds % 2
    if spec.rounds % 2:
        left, right = right, left ^ round_function(right, w) ^ rk[paired]

    for i in range(paired - 2, -1, -2):
        left ^= round_function(right, w) ^ rk[i + 1]
        right ^= round_function(left, w) ^ rk[i]

    return right, left


def encrypt(block: Sequence[int], key_words: Sequence[int], variant: VariantLike) -> Block:
    """Expand ``key_words`` and encrypt a single block."""
    return encrypt_words(block, expand_key(key_words, variant), variant)


def decrypt(block: Sequence[int], key_words: Sequence[int], variant: VariantLike) -> Block:
    """Expand ``key_words`` and decrypt a single block."""
    return decrypt_words(block, expand_key(key_words, variant), variant)
