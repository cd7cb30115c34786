import sys
from pathlib import Path

import pytest
from pydantic import ValidationError

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from simonlab.cipher.errors import SimonError, UnsupportedVariant
from simonlab.cipher.variants import (
    VARIANTS,
    Variant,
    VariantSpec,
    get_variant,
    list_variants,
    select_variant,
)


@pytest.mark.parametrize(
    "block_bits,key_bits,tag,word,m,rounds",
    [
        (64, 96, Variant.SIMON64_96, 32, 3, 42),
        (64, 128, Variant.SIMON64_128, 32, 4, 44),
        (128, 128, Variant.SIMON128_128, 64, 2, 68),
        (128, 192, Variant.SIMON128_192, 64, 3, 69),
        (128, 256, Variant.SIMON128_256, 64, 4, 72),
    ],
)
def test_select_variant(block_bits, key_bits, tag, word, m, rounds):
    spec = select_variant(block_bits, key_bits)
    assert spec.tag is tag
    assert (spec.word_size, spec.key_words, spec.rounds) == (word, m, rounds)
    assert spec.block_bytes * 8 == block_bits
    assert spec.key_bytes * 8 == key_bits


@pytest.mark.parametrize(
    "block_bits,key_bits",
    [(64, 64), (64, 192), (64, 256), (128, 96), (32, 64), (48, 72), (256, 256), (0, 0)],
)
def test_unsupported_pairs_are_rejected(block_bits, key_bits):
    with pytest.raises(UnsupportedVariant):
        select_variant(block_bits, key_bits)


def test_unsupported_variant_is_a_value_error():
    assert issubclass(UnsupportedVariant, SimonError)
    assert issubclass(SimonError, ValueError)


@pytest.mark.parametrize("name", ["SIMON128_192", "simon128_192", "Simon128/192", "128_192"])
def test_get_variant_by_name(name):
    assert get_variant(name).tag is Variant.SIMON128_192


def test_get_variant_passthrough():
    spec = VARIANTS[Variant.SIMON64_96]
    assert get_variant(spec) is spec
    assert get_variant(Variant.SIMON64_96) is spec


def test_get_variant_unknown():
    with pytest.raises(UnsupportedVariant):
        get_variant("SIMON32_64")


def test_list_variants_in_table_order():
    assert [s.tag for s in list_variants()] == list(Variant)


def test_only_128_bit_variants_have_closing_bits():
    for spec in list_variants():
        assert bool(spec.closing_bits) == (spec.block_size_bits == 128)


def test_spec_names():
    assert [s.name for s in list_variants()] == [
        "Simon64/96", "Simon64/128", "Simon128/128", "Simon128/192", "Simon128/256",
    ]


def test_variant_specs_are_frozen():
    spec = VARIANTS[Variant.SIMON64_96]
    with pytest.raises(ValidationError):
        spec.rounds = 10


def test_inconsistent_spec_is_rejected():
    with pytest.raises(ValidationError):
        VariantSpec(
            tag=Variant.SIMON64_96, block_size_bits=64, key_size_bits=128,
            word_size=32, key_words=3, rounds=42, sequence="z2",
        )
    with pytest.raises(ValidationError):
        VariantSpec(
            tag=Variant.SIMON64_96, block_size_bits=64, key_size_bits=96,
            word_size=32, key_words=3, rounds=42, sequence="z9",
        )
    with pytest.raises(ValidationError):
        VariantSpec(
            tag=Variant.SIMON64_96, block_size_bits=48, key_size_bits=72,
            word_size=24, key_words=3, rounds=36, sequence="z0",
        )
