import logging
import sys
from pathlib import Path

import pytest

_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import simonlab.cipher.simon as simon
from simonlab.cipher.builder import MODE_DEC, MODE_ENC, build_cipher, cipher_for, run_simon
from simonlab.cipher.errors import MalformedInput, UnsupportedVariant
from simonlab.cipher.variants import Variant


@pytest.fixture
def no_mixing(monkeypatch):
    """Fail the test if the round function is ever reached."""
    def _boom(x, w):
        raise AssertionError("round function called on rejected input")
    monkeypatch.setattr(simon, "round_function", _boom)


def test_block_must_be_two_words(no_mixing):
    schedule = simon.expand_key([0, 0, 0], Variant.SIMON64_96)
    with pytest.raises(MalformedInput):
        simon.encrypt_words([1], schedule, Variant.SIMON64_96)
    with pytest.raises(MalformedInput):
        simon.decrypt_words([1, 2, 3], schedule, Variant.SIMON64_96)


def test_block_word_out_of_range(no_mixing):
    schedule = simon.expand_key([0, 0], Variant.SIMON128_128)
    with pytest.raises(MalformedInput):
        simon.encrypt_words([1 << 64, 0], schedule, Variant.SIMON128_128)


def test_schedule_length_must_match(no_mixing):
    schedule = simon.expand_key([0, 0, 0], Variant.SIMON64_96)
    with pytest.raises(MalformedInput):
        simon.encrypt_words([0, 0], schedule[:-1], Variant.SIMON64_96)
    with pytest.raises(MalformedInput):
        simon.decrypt_words([0, 0], schedule, Variant.SIMON64_128)


def test_key_word_count_mismatch(no_mixing):
    with pytest.raises(UnsupportedVariant):
        simon.encrypt([0, 0], [0, 0, 0], Variant.SIMON128_128)


@pytest.mark.parametrize(
    "text_len,key_len",
    [(8, 8), (8, 24), (16, 12), (12, 12), (0, 0), (4, 16)],
)
def test_harness_rejects_unsupported_lengths(no_mixing, caplog, text_len, key_len):
    caplog.set_level(logging.ERROR, logger="simonlab.cipher.builder")
    with pytest.raises(UnsupportedVariant):
        run_simon(MODE_ENC, bytes(text_len), bytes(key_len))
    assert f"Simon{text_len * 8}/{key_len * 8}" in caplog.text


def test_harness_rejects_unknown_mode():
    with pytest.raises(ValueError):
        run_simon(2, bytes(8), bytes(12))


def test_harness_logs_detected_variant(caplog):
    caplog.set_level(logging.INFO, logger="simonlab.cipher.builder")
    run_simon(MODE_ENC, bytes(16), bytes(24))
    run_simon(MODE_DEC, bytes(8), bytes(16))
    assert "Detected Simon128/192 -- encryption mode." in caplog.text
    assert "Detected Simon64/128 -- decryption mode." in caplog.text


def test_cipher_byte_lengths_checked(no_mixing):
    cipher = build_cipher(Variant.SIMON64_96)
    with pytest.raises(MalformedInput):
        cipher.encrypt_block(bytes(7), bytes(12))
    with pytest.raises(MalformedInput):
        cipher.decrypt_block(bytes(8), bytes(16))


def test_forced_variant_with_wrong_sizes(no_mixing):
    cipher = build_cipher("SIMON128_256")
    with pytest.raises(MalformedInput):
        run_simon(MODE_ENC, bytes(8), bytes(12), cipher=cipher)


def test_cipher_for_detects():
    assert cipher_for(bytes(16), bytes(32)).spec.tag is Variant.SIMON128_256


def test_round_key_out_of_range(no_mixing):
    schedule = list(simon.expand_key([0, 0, 0], Variant.SIMON64_96))
    schedule[5] = 1 << 40
    with pytest.raises(MalformedInput, match="round key word 5"):
        simon.encrypt_words([1, 2], schedule, Variant.SIMON64_96)
    with pytest.raises(MalformedInput, match="round key word 5"):
        simon.decrypt_words([1, 2], schedule, Variant.SIMON64_96)


def test_negative_round_key_rejected(no_mixing):
    schedule = list(simon.expand_key([0, 0], Variant.SIMON128_128))
    schedule[-1] = -1
    with pytest.raises(MalformedInput):
        simon.encrypt_words([0, 0], schedule, Variant.SIMON128_128)


@pytest.mark.parametrize("bad", [True, False, 1.0, "1", None])
def test_non_integer_words_rejected(no_mixing, bad):
    with pytest.raises(MalformedInput):
        simon.encrypt([bad, 0], [0, 0, 0], Variant.SIMON64_96)
    with pytest.raises(MalformedInput):
        simon.expand_key([0, bad, 0], Variant.SIMON64_96)


def test_forced_cipher_logs_its_own_variant(caplog):
    caplog.set_level(logging.INFO, logger="simonlab.cipher.builder")
    cipher = build_cipher("SIMON128_256")
    with pytest.raises(MalformedInput):
        run_simon(MODE_ENC, bytes(8), bytes(12), cipher=cipher)
    assert "Using Simon128/256 -- encryption mode." in caplog.text
    assert "Simon64/96" not in caplog.text
