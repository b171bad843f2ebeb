"""Mnemonic-backed key store with deterministic secp256k1 key generation and signing."""

__version__ = "0.1.0"

__all__ = [
    "address",
    "bip39",
    "errors",
    "file_io",
    "kv",
    "mnemonic",
    "multisig",
    "store",
    "wordlist",
]