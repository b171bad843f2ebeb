"""BIP-39 mnemonic creation, validation and seed derivation (English only)."""

from __future__ import annotations

import hashlib
import secrets
import unicodedata

from .errors import Bip39Error
from .wordlist import INDEX, WORDS

_ENTROPY_LENGTHS = (16, 20, 24, 28, 32)
_PBKDF2_ROUNDS = 2048


def new_entropy_w24() -> bytes:
    """Return fresh entropy for a 24-word mnemonic."""
    return secrets.token_bytes(32)


def _checksum_bits(entropy: bytes) -> tuple[int, int]:
    bits = len(entropy) * 8 // 32
    digest = hashlib.sha256(entropy).digest()
    return digest[0] >> (8 - bits), bits


def entropy_to_phrase(entropy: bytes) -> str:
    """Return the mnemonic phrase for ``entropy``."""
    entropy = bytes(entropy)
    if len(entropy) not in _ENTROPY_LENGTHS:
        raise Bip39Error("invalid entropy")
    checksum, cs_bits = _checksum_bits(entropy)
    total_bits = len(entropy) * 8 + cs_bits
    value = (int.from_bytes(entropy, "big") << cs_bits) | checksum
    word_count = total_bits // 11
    indices = [
        (value >> (11 * (word_count - 1 - n))) & 0x7FF for n in range(word_count)
    ]
    return " ".join(WORDS[i] for i in indices)


def phrase_to_entropy(phrase: str) -> bytes:
    """Return the entropy encoded by a valid mnemonic phrase."""
    words = unicodedata.normalize("NFKD", phrase).split()
    if len(words) * 11 * 32 % 33 or len(words) * 11 * 32 // 33 // 8 not in _ENTROPY_LENGTHS:
        raise Bip39Error("invalid phrase")
    value = 0
    for word in words:
        if word not in INDEX:
            raise Bip39Error("invalid phrase")
        value = (value << 11) | INDEX[word]
    cs_bits = len(words) * 11 // 33
    entropy = (value >> cs_bits).to_bytes(len(words) * 11 * 32 // 33 // 8, "big")
    checksum, _ = _checksum_bits(entropy)
    if value & ((1 << cs_bits) - 1) != checksum:
        raise Bip39Error("invalid phrase")
    return entropy


def seed(entropy: bytes, password: str) -> bytes:
    """Derive the 64-byte BIP-39 seed from ``entropy`` and a passphrase."""
    phrase = unicodedata.normalize("NFKD", entropy_to_phrase(entropy))
    salt = unicodedata.normalize("NFKD", "mnemonic" + password)
    return hashlib.pbkdf2_hmac(
        "sha512", phrase.encode("utf-8"), salt.encode("utf-8"), _PBKDF2_ROUNDS
    )