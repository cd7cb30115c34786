from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import MalformedInput, UnsupportedVariant
from .simon import Block, Schedule, VariantLike, decrypt_words, encrypt_words, expand_key
from .variants import VariantSpec, get_variant, select_variant
from .words import bytes_to_words, words_to_bytes

logger = logging.getLogger(__name__)

MODE_ENC = 0
MODE_DEC = 1


class BlockCipher:
    def encrypt_block(self, plaintext_block: bytes, key: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError

    def decrypt_block(self, ciphertext_block: bytes, key: bytes) -> bytes:  # pragma: no cover
        raise NotImplementedError


@dataclass(frozen=True)
class SimonCipher(BlockCipher):
    """Byte-level SIMON bound to one variant.

    Buffers are little-endian: the first ``word_bytes`` bytes of a block or
    key are its least significant word.
    """

    spec: VariantSpec

    def _key_words(self, key: bytes) -> list:
        if len(key) != self.spec.key_bytes:
            raise MalformedInput(f"{self.spec.name} key must be {self.spec.key_bytes} bytes, got {len(key)}")
        return bytes_to_words(key, self.spec.word_bytes)

    def _block_words(self, block: bytes, what: str) -> list:
        if len(block) != self.spec.block_bytes:
            raise MalformedInput(f"{what} block must be {self.spec.block_bytes} bytes, got {len(block)}")
        return bytes_to_words(block, self.spec.word_bytes)

    def expand(self, key: bytes) -> Schedule:
        """Round key schedule for a byte key. Callers may keep it for many blocks."""
        return expand_key(self._key_words(key), self.spec)

    def encrypt_words(self, block: Sequence[int], schedule: Sequence[int]) -> Block:
        return encrypt_words(block, schedule, self.spec)

    def decrypt_words(self, block: Sequence[int], schedule: Sequence[int]) -> Block:
        return decrypt_words(block, schedule, self.spec)

    def encrypt_block(self, plaintext_block: bytes, key: bytes) -> bytes:
        words = self._block_words(plaintext_block, "Plaintext")
        out = encrypt_words(words, self.expand(key), self.spec)
        return words_to_bytes(out, self.spec.word_bytes)

    def decrypt_block(self, ciphertext_block: bytes, key: bytes) -> bytes:
        words = self._block_words(ciphertext_block, "Ciphertext")
        out = decrypt_words(words, self.expand(key), self.spec)
        return words_to_bytes(out, self.spec.word_bytes)


def build_cipher(variant: VariantLike) -> SimonCipher:
    return SimonCipher(spec=get_variant(variant))


def cipher_for(text: bytes, key: bytes) -> SimonCipher:
    """Pick the variant from the bit lengths of a text block and a key."""
    return SimonCipher(spec=select_variant(len(text) * 8, len(key) * 8))


def run_simon(mode: int, text: bytes, key: bytes, *, cipher: Optional[SimonCipher] = None) -> bytes:
    """Encrypt or decrypt one block, detecting the variant from the buffer sizes.

    Args:
        mode: ``MODE_ENC`` or ``MODE_DEC``.
        text: Plaintext (encryption) or ciphertext (decryption) block.
        key: Key bytes.
        cipher: Optional pre-built cipher; skips detection.

    Returns:
        Ciphertext on encryption, plaintext on decryption.
    """
    if mode not in (MODE_ENC, MODE_DEC):
        raise ValueError(f"mode must be MODE_ENC ({MODE_ENC}) or MODE_DEC ({MODE_DEC}), got {mode!r}")

    direction = "encryption" if mode == MODE_ENC else "decryption"
    if cipher is None:
        try:
            cipher = cipher_for(text, key)
        except UnsupportedVariant:
            logger.error(
                "Cannot run Simon%d/%d: unsupported block/key size", len(text) * 8, len(key) * 8
            )
            raise
        logger.info("Detected %s -- %s mode.", cipher.spec.name, direction)
    else:
        logger.info("Using %s -- %s mode.", cipher.spec.name, direction)
    if mode == MODE_ENC:
        return cipher.encrypt_block(text, key)
    return cipher.decrypt_block(text, key)
