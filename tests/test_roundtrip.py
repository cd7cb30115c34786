import random
import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from simonlab.cipher.builder import build_cipher
from simonlab.cipher.simon import decrypt_words, encrypt_words, expand_key
from simonlab.cipher.variants import Variant, list_variants
from simonlab.evaluation.roundtrip import run_all_variants, run_roundtrip_tests


@pytest.mark.parametrize("variant", list(Variant))
def test_bytes_roundtrip(variant):
    """Roundtrip P = D(E(P, K), K) for each variant."""
    cipher = build_cipher(variant)
    spec = cipher.spec
    rng = random.Random(1337)

    for _ in range(50):
        pt = bytes(rng.randrange(0, 256) for _ in range(spec.block_bytes))
        key = bytes(rng.randrange(0, 256) for _ in range(spec.key_bytes))
        ct = cipher.encrypt_block(pt, key)
        rt = cipher.decrypt_block(ct, key)
        assert rt == pt, (
            f"{variant.value}: roundtrip failed. "
            f"pt={pt.hex()}, key={key.hex()}, ct={ct.hex()}, rt={rt.hex()}"
        )


@pytest.mark.parametrize("spec", list_variants(), ids=lambda s: s.tag.value)
def test_words_roundtrip_with_reused_schedule(spec):
    rng = random.Random(2026)
    key = [rng.getrandbits(spec.word_size) for _ in range(spec.key_words)]
    schedule = expand_key(key, spec)
    for _ in range(20):
        block = (rng.getrandbits(spec.word_size), rng.getrandbits(spec.word_size))
        assert decrypt_words(encrypt_words(block, schedule, spec), schedule, spec) == block


@pytest.mark.parametrize("spec", list_variants(), ids=lambda s: s.tag.value)
def test_edge_blocks_roundtrip(spec):
    mask = (1 << spec.word_size) - 1
    key = [0] * spec.key_words
    schedule = expand_key(key, spec)
    for block in [(0, 0), (mask, mask), (mask, 0), (0, 1)]:
        ct = encrypt_words(block, schedule, spec)
        assert ct != block
        assert decrypt_words(ct, schedule, spec) == block


def test_encryption_is_deterministic():
    cipher = build_cipher(Variant.SIMON128_192)
    pt, key = bytes(range(16)), bytes(range(24))
    assert cipher.encrypt_block(pt, key) == cipher.encrypt_block(pt, key)


def test_run_roundtrip_tests_reports_perfect():
    result = run_roundtrip_tests("SIMON64_128", num_vectors=100, seed=7)
    assert result.is_perfect
    assert result.passed == 100
    assert result.success_rate == 1.0
    assert result.rounds == 44
    assert result.to_dict()["variant"] == "SIMON64_128"
    assert result.summary().startswith("[PASS] SIMON64_128")


def test_run_all_variants_progress():
    seen = []
    results = run_all_variants(
        num_vectors=5,
        seed=3,
        progress_callback=lambda name, i, total: seen.append((name, i, total)),
    )
    assert [r.variant for r in results] == [v.value for v in Variant]
    assert all(r.is_perfect for r in results)
    assert seen[0] == ("SIMON64_96", 0, 5)
    assert len(seen) == 5
