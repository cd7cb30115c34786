"""Avalanche and Strict Avalanche Criterion (SAC) measurements.

Measures whether flipping one input bit flips each output bit with
probability ~0.5. This is a smoke test for a mis-wired rotation or constant,
not a security argument.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field, asdict
from typing import Any, Callable, Dict, List, Optional

import numpy as np

from simonlab.cipher.builder import SimonCipher


def _flip_bit(data: bytes, bit_index: int) -> bytes:
    byte_i = bit_index // 8
    bit_i = bit_index % 8
    if byte_i < 0 or byte_i >= len(data):
        raise IndexError("bit_index out of range")
    out = bytearray(data)
    out[byte_i] ^= 1 << bit_i
    return bytes(out)


def _rand_bytes(rng: random.Random, n: int) -> bytes:
    return bytes(rng.randrange(0, 256) for _ in range(n))


def _diff_bits(a: bytes, b: bytes) -> np.ndarray:
    """0/1 vector of the positions where a and b differ, bit 0 of byte 0 first."""
    diff = np.bitwise_xor(np.frombuffer(a, dtype=np.uint8), np.frombuffer(b, dtype=np.uint8))
    return np.unpackbits(diff, bitorder="little")


def _check_input_type(input_type: str) -> None:
    if input_type not in ("plaintext", "key"):
        raise ValueError(f"input_type must be 'plaintext' or 'key', got '{input_type}'")


@dataclass
class SACResult:
    """Strict Avalanche Criterion measurement for one input type."""
    variant: str
    input_type: str             # "plaintext" or "key"
    num_trials: int
    num_input_bits: int
    num_output_bits: int

    # Per-input-bit mean flip fraction (len = num_input_bits)
    per_input_bit_mean: List[float] = field(default_factory=list)

    global_mean: float = 0.0    # ~0.5 ideal
    global_std: float = 0.0     # Std dev of per-bit means
    min_bit_prob: float = 0.0
    max_bit_prob: float = 0.0
    sac_deviation: float = 0.0  # Mean |P(out j flips | in i flips) - 0.5| over all (i, j)

    @property
    def passes_sac(self) -> bool:
        """Heuristic: SAC deviation < 0.05 and min_bit_prob > 0.35."""
        return self.sac_deviation < 0.05 and self.min_bit_prob > 0.35

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["passes_sac"] = self.passes_sac
        return d

    def summary(self) -> str:
        status = "PASS" if self.passes_sac else "FAIL"
        return (
            f"[{status}] SAC({self.variant}, {self.input_type}): "
            f"mean={self.global_mean:.4f}, std={self.global_std:.4f}, "
            f"deviation={self.sac_deviation:.4f}, "
            f"min={self.min_bit_prob:.4f}, max={self.max_bit_prob:.4f}"
        )


def compute_sac(
    cipher: SimonCipher,
    *,
    input_type: str = "plaintext",
    trials: int = 200,
    seed: int = 1337,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> SACResult:
    """Compute the Strict Avalanche Criterion with per-input-bit analysis.

    For each input bit position i:
      - run ``trials`` iterations with random plaintext and key
      - flip bit i, encrypt both, record which output bits changed

    Args:
        cipher: Cipher bound to the variant under test.
        input_type: "plaintext" or "key", the input to perturb.
        trials: Number of random trials per input bit.
        seed: Random seed for reproducibility.
        progress_callback: Optional callback(current_bit, total_bits).

    Returns:
        SACResult with per-bit and aggregate statistics.
    """
    _check_input_type(input_type)
    spec = cipher.spec
    num_input_bits = spec.block_size_bits if input_type == "plaintext" else spec.key_size_bits
    num_output_bits = spec.block_size_bits
    rng = random.Random(seed)

    # counts[i, j]: how often output bit j flipped when input bit i was flipped
    counts = np.zeros((num_input_bits, num_output_bits), dtype=np.int64)

    for bit_i in range(num_input_bits):
        if progress_callback:
            progress_callback(bit_i, num_input_bits)

        for _ in range(trials):
            pt = _rand_bytes(rng, spec.block_bytes)
            key = _rand_bytes(rng, spec.key_bytes)
            ct1 = cipher.encrypt_block(pt, key)

            if input_type == "plaintext":
                ct2 = cipher.encrypt_block(_flip_bit(pt, bit_i), key)
            else:
                ct2 = cipher.encrypt_block(pt, _flip_bit(key, bit_i))

            counts[bit_i] += _diff_bits(ct1, ct2)

    probs = counts / float(max(trials, 1))
    per_bit = probs.mean(axis=1)

    return SACResult(
        variant=spec.tag.value,
        input_type=input_type,
        num_trials=trials,
        num_input_bits=num_input_bits,
        num_output_bits=num_output_bits,
        per_input_bit_mean=[round(float(p), 6) for p in per_bit],
        global_mean=round(float(per_bit.mean()), 6),
        global_std=round(float(per_bit.std(ddof=1)) if num_input_bits > 1 else 0.0, 6),
        min_bit_prob=round(float(per_bit.min()), 6),
        max_bit_prob=round(float(per_bit.max()), 6),
        sac_deviation=round(float(np.abs(probs - 0.5).mean()), 6),
    )


def avalanche_mean(
    cipher: SimonCipher,
    *,
    input_type: str = "plaintext",
    trials: int = 200,
    seed: int = 1337,
) -> float:
    """Mean fraction of ciphertext bits that flip when one random input bit flips."""
    _check_input_type(input_type)
    spec = cipher.spec
    rng = random.Random(seed if input_type == "plaintext" else seed + 1)
    total_bits = spec.block_size_bits
    input_bits = spec.block_size_bits if input_type == "plaintext" else spec.key_size_bits

    total_frac = 0.0
    for _ in range(trials):
        key = _rand_bytes(rng, spec.key_bytes)
        pt = _rand_bytes(rng, spec.block_bytes)
        ct = cipher.encrypt_block(pt, key)
        bit = rng.randrange(0, input_bits)
        if input_type == "plaintext":
            ct2 = cipher.encrypt_block(_flip_bit(pt, bit), key)
        else:
            ct2 = cipher.encrypt_block(pt, _flip_bit(key, bit))
        total_frac += int(_diff_bits(ct, ct2).sum()) / total_bits
    return total_frac / trials if trials else 0.0
