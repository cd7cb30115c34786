"""The five supported SIMON parameter sets and variant dispatch.

The table is closed: a (block size, key size) pair maps to exactly one
``VariantSpec`` or is rejected with ``UnsupportedVariant``.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import SEQUENCE_BITS, SEQUENCES
from .errors import UnsupportedVariant

ROUNDS_64_96 = 42
ROUNDS_64_128 = 44
ROUNDS_128_128 = 68
ROUNDS_128_192 = 69
ROUNDS_128_256 = 72


class Variant(str, Enum):
    SIMON64_96 = "SIMON64_96"
    SIMON64_128 = "SIMON64_128"
    SIMON128_128 = "SIMON128_128"
    SIMON128_192 = "SIMON128_192"
    SIMON128_256 = "SIMON128_256"


class VariantSpec(BaseModel):
    """Static description of one SIMON variant."""

    model_config = ConfigDict(frozen=True)

    tag: Variant
    block_size_bits: int = Field(..., description="64 or 128")
    key_size_bits: int
    word_size: int = Field(..., description="32 or 64")
    key_words: int = Field(..., ge=2, le=4)
    rounds: int = Field(..., ge=1)
    sequence: str
    # Fixed constant bits for the final key-schedule updates that run past
    # the literal sequence (128-bit block variants only).
    closing_bits: Tuple[int, ...] = ()

    @field_validator("word_size")
    @classmethod
    def _word_size(cls, v: int) -> int:
        if v not in (32, 64):
            raise ValueError("word_size must be 32 or 64")
        return v

    @field_validator("sequence")
    @classmethod
    def _sequence(cls, v: str) -> str:
        if v not in SEQUENCES:
            raise ValueError(f"Unknown constant sequence: {v}")
        return v

    @field_validator("closing_bits")
    @classmethod
    def _closing_bits(cls, v: Tuple[int, ...]) -> Tuple[int, ...]:
        if any(b not in (0, 1) for b in v):
            raise ValueError("closing_bits must be 0/1 values")
        return v

    @model_validator(mode="after")
    def _consistent_sizes(self) -> "VariantSpec":
        if self.block_size_bits != 2 * self.word_size:
            raise ValueError("block_size_bits must be two words")
        if self.key_size_bits != self.key_words * self.word_size:
            raise ValueError("key_size_bits must equal key_words * word_size")
        if self.rounds - self.key_words - len(self.closing_bits) > SEQUENCE_BITS:
            raise ValueError("constant sequence too short for the round count")
        return self

    @property
    def name(self) -> str:
        return f"Simon{self.block_size_bits}/{self.key_size_bits}"

    @property
    def word_bytes(self) -> int:
        return self.word_size // 8

    @property
    def block_bytes(self) -> int:
        return self.block_size_bits // 8

    @property
    def key_bytes(self) -> int:
        return self.key_size_bits // 8


VARIANTS: Dict[Variant, VariantSpec] = {
    Variant.SIMON64_96: VariantSpec(
        tag=Variant.SIMON64_96, block_size_bits=64, key_size_bits=96,
        word_size=32, key_words=3, rounds=ROUNDS_64_96, sequence="z2",
    ),
    Variant.SIMON64_128: VariantSpec(
        tag=Variant.SIMON64_128, block_size_bits=64, key_size_bits=128,
        word_size=32, key_words=4, rounds=ROUNDS_64_128, sequence="z3",
    ),
    Variant.SIMON128_128: VariantSpec(
        tag=Variant.SIMON128_128, block_size_bits=128, key_size_bits=128,
        word_size=64, key_words=2, rounds=ROUNDS_128_128, sequence="z2",
        closing_bits=(1, 0),
    ),
    Variant.SIMON128_192: VariantSpec(
        tag=Variant.SIMON128_192, block_size_bits=128, key_size_bits=192,
        word_size=64, key_words=3, rounds=ROUNDS_128_192, sequence="z3",
        closing_bits=(1, 0, 1),
    ),
    Variant.SIMON128_256: VariantSpec(
        tag=Variant.SIMON128_256, block_size_bits=128, key_size_bits=256,
        word_size=64, key_words=4, rounds=ROUNDS_128_256, sequence="z4",
        closing_bits=(0, 1, 0, 0),
    ),
}

_BY_SIZES: Dict[Tuple[int, int], VariantSpec] = {
    (v.block_size_bits, v.key_size_bits): v for v in VARIANTS.values()
}


def select_variant(block_size_bits: int, key_size_bits: int) -> VariantSpec:
    """Return the variant for a (block bits, key bits) pair."""
    try:
        return _BY_SIZES[(block_size_bits, key_size_bits)]
    except KeyError:
        raise UnsupportedVariant(
            f"No SIMON variant for {block_size_bits}-bit blocks and {key_size_bits}-bit keys"
        ) from None


def get_variant(variant: Union[VariantSpec, Variant, str]) -> VariantSpec:
    """Resolve a spec, enum tag or tag name (case-insensitive) to its ``VariantSpec``."""
    if isinstance(variant, VariantSpec):
        return variant
    if isinstance(variant, Variant):
        return VARIANTS[variant]
    key = str(variant).strip().upper().replace("/", "_")
    if not key.startswith("SIMON"):
        key = "SIMON" + key
    try:
        return VARIANTS[Variant(key)]
    except ValueError:
        raise UnsupportedVariant(f"Unknown SIMON variant: {variant!r}") from None


def list_variants() -> List[VariantSpec]:
    return list(VARIANTS.values())
