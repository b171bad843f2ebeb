[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "tofnd"
version = "0.1.0"
description = "Mnemonic-backed key store with deterministic secp256k1 ECDSA keygen and signing"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "ecdsa",
    "secp256k1",
    "multisig",
    "bip39",
    "mnemonic",
    "key-value store",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.setuptools.packages.find]
include = ["tofnd*"]

[tool.pytest.ini_options]
addopts = "-ra"
