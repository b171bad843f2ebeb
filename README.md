# tofnd

A small key-management library built around a single BIP-39 mnemonic.
The mnemonic's entropy is kept in a local key-value store; every multisig
key is derived deterministically from the mnemonic's seed and a key
identifier, so keys never need to be stored on their own.

## Modules

- **`tofnd.store`** – `Store(path)`, a key-value store kept in an SQLite
  file (`db.sqlite3`) inside the directory `path`. Keys follow a
  reserve-then-put discipline: `reserve(key)` returns a `KeyReservation`
  and fails if the key is already present; `put(reservation, value)`
  writes a value only while the key still holds its reservation, so a
  value can be written once. `get(key)` returns the value, `exists(key)`
  tells whether the key is reserved or holds a value, `raw_get(key)`
  returns the stored bytes (or `None`), `remove(key)` deletes a key and
  `close()` closes the file. `Store` is also a context manager. Values may
  be `bytes`, `str`, or anything JSON can encode; `was_recovered` tells
  whether the database file already existed when the store was opened.
- **`tofnd.kv`** – `Kv(root)`, an asynchronous handle to a `Store` placed
  at `<root>/kvstore/kv` (or at any path with `Kv.with_db_name(path)`).
  Its coroutines `reserve_key`, `unreserve_key`, `put`, `get` and
  `exists` run the store operations in a worker thread; `close()` closes
  the store.
- **`tofnd.bip39`** – `new_entropy_w24()` (32 random bytes, a 24-word
  mnemonic), `entropy_to_phrase(entropy)`, `phrase_to_entropy(phrase)`
  (checks the words and the checksum) and `seed(entropy, password)`
  (the 64-byte PBKDF2-HMAC-SHA512 seed). English word list only, found in
  `tofnd.wordlist` as `WORDS` and `INDEX`.
- **`tofnd.file_io`** – `FileIo(root)` writes the mnemonic phrase to
  `<root>/export` with `entropy_to_file(entropy)` and refuses to
  overwrite an existing export; `check_if_not_exported()` raises if the
  file is there, and `export_path()` returns its path.
- **`tofnd.mnemonic`** – the `Cmd` commands and `KvManager(root)`, which
  holds a `Kv` (`kv`) and a `FileIo` (`io`) under the same root.
  `KvManager.seed()` returns the seed of the stored mnemonic with an
  empty passphrase.
- **`tofnd.multisig`** – `MultisigService(kv_manager)` answers
  `key_presence(key_uid)`, `keygen(key_uid, party_uid)` and
  `sign(key_uid, msg_to_sign, party_uid)` with `KeyPresence`,
  `KeygenResponse` and `SignResponse` values. Keys are secp256k1; a public
  key is a 33-byte compressed point and a signature is DER-encoded.
  `verify(pub_key, msg_digest, signature)` checks a signature.
- **`tofnd.address`** – `addr(ip, port)` parses an IPv4 address (or an
  IPv6 address in brackets) and a port from 0 to 65535 into a
  `(host, port)` pair, raising `ValueError` for anything invalid.

## Mnemonic commands

| command    | effect                                                                      | `exit_after_cmd()` |
|------------|-----------------------------------------------------------------------------|--------------------|
| `existing` | requires a stored mnemonic and no export file                               | `False` |
| `create`   | creates a new mnemonic, stores it and writes it to the export file          | `True`  |
| `import`   | reads a phrase from the terminal without echo and stores it                 | `True`  |
| `export`   | writes the stored mnemonic to the export file                               | `True`  |

`Cmd.from_string` turns one of these names into a command and raises
`WrongCommandError` for anything else. `KvManager.handle_mnemonic(cmd)`
runs a command and returns the manager; a failure is raised as a
`CommandError` whose `inner` holds the cause.

An export file holds the mnemonic in plain text. While it exists, the
`existing` and `export` commands refuse to run; move the file somewhere
safe, then remove it.

## Example

```python
import asyncio
from pathlib import Path

from tofnd.mnemonic import Cmd, KvManager
from tofnd.multisig import MultisigService, verify


async def run(root: Path) -> None:
    manager = KvManager(root)
    await manager.handle_mnemonic(Cmd.from_string("create"))

    service = MultisigService(manager)
    keygen = await service.keygen("my-key", "party-a")
    digest = bytes(32)
    signed = await service.sign("my-key", digest, "party-a")
    print(verify(keygen.pub_key, digest, signed.signature))
    manager.close()


asyncio.run(run(Path("./tofnd-data")))
```

Key identifiers shorter than four bytes are refused, and messages to sign
must be exactly 32 bytes; in both cases the response carries an `error`
string instead of a key or a signature. `key_presence` answers
`KeyPresence.PRESENT` whenever a mnemonic is stored and
`KeyPresence.FAIL` otherwise.

## Errors

Failures raise exceptions from `tofnd.errors`: store problems derive
from `KvError` (`ReserveError`, `PutError`, `GetError`, `ExistsError`),
each wrapping an `InnerKvError` such as `LogicalError`,
`SerializationError` or `DeserializationError`; mnemonic problems from
`MnemonicError`, including `WrongCommandError` and `CommandError`; file
problems from `FileIoError`, including `ExportExistsError`; invalid
entropy or phrases raise `Bip39Error`.

## What this package does not do

- It has no command-line program and no network server: the services are
  plain Python objects to be called from your own code. `addr` only
  parses an address; nothing listens on it.
- The store is not encrypted. The mnemonic's entropy sits in an ordinary
  SQLite file, so protect the root directory yourself.
- There is no threshold (multi-party) key generation or signing; every
  key is derived and used by a single party.