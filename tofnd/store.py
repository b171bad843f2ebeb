"""Persistent key-value store with key reservation before writing."""

from __future__ import annotations

import json
import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from .errors import DeserializationError, InnerKvError, LogicalError, SerializationError

DEFAULT_KV_NAME = "kv"
DEFAULT_KV_PATH = "kvstore"
DEFAULT_RESERV = b""

_DB_FILE = "db.sqlite3"
_TAG_BYTES = b"b"
_TAG_STR = b"s"
_TAG_JSON = b"j"


@dataclass(frozen=True)
class KeyReservation:
    """Proof that a key was reserved and may be written once."""

    key: str


def _serialize(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return _TAG_BYTES + bytes(value)
    if isinstance(value, str):
        return _TAG_STR + value.encode("utf-8")
    try:
        return _TAG_JSON + json.dumps(value).encode("utf-8")
    except (TypeError, ValueError):
        raise SerializationError() from None


def _deserialize(data: bytes) -> Any:
    tag, body = data[:1], data[1:]
    try:
        if tag == _TAG_BYTES:
            return body
        if tag == _TAG_STR:
            return body.decode("utf-8")
        if tag == _TAG_JSON:
            return json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        raise DeserializationError() from None
    raise DeserializationError()


class Store:
    """A key-value store kept in the directory ``path``."""

    def __init__(self, path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()
        db_file = self.path / _DB_FILE
        self.was_recovered = db_file.exists()
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(db_file, check_same_thread=False)
            with self._conn:
                self._conn.execute(
                    "CREATE TABLE IF NOT EXISTS kv "
                    "(key TEXT PRIMARY KEY, value BLOB NOT NULL)"
                )
        except (OSError, sqlite3.Error) as err:
            raise InnerKvError(f"Store Error: {err}") from err

    @contextmanager
    def _db(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as err:
                raise InnerKvError(f"Store Error: {err}") from err

    @staticmethod
    def _fetch(conn: sqlite3.Connection, key: str) -> bytes | None:
        row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return None if row is None else bytes(row[0])

    @staticmethod
    def _write(conn: sqlite3.Connection, key: str, value: bytes) -> None:
        conn.execute(
            "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)", (key, value)
        )

    def reserve(self, key: str) -> KeyReservation:
        """Reserve ``key``; fails if the key is already present."""
        with self._db() as conn:
            if self._fetch(conn, key) is not None:
                raise LogicalError(f"kv_manager key <{key}> already reserved.")
            self._write(conn, key, DEFAULT_RESERV)
        return KeyReservation(key)

    def put(self, reservation: KeyReservation, value: Any) -> None:
        """Store ``value`` under a key that still holds its reservation."""
        key = reservation.key
        with self._db() as conn:
            if self._fetch(conn, key) != DEFAULT_RESERV:
                raise LogicalError(
                    f"did not find reservation for key <{key}> in kv store."
                )
            self._write(conn, key, _serialize(value))

    def get(self, key: str) -> Any:
        """Return the value stored under ``key``."""
        with self._db() as conn:
            data = self._fetch(conn, key)
        if data is None:
            raise LogicalError(f"key <{key}> does not have a value.")
        return _deserialize(data)

    def exists(self, key: str) -> bool:
        """Tell whether ``key`` is reserved or holds a value."""
        try:
            return self.raw_get(key) is not None
        except InnerKvError as err:
            raise LogicalError(
                f"Could not perform 'contains_key' for key <{key}> due to error: {err}"
            ) from err

    def raw_get(self, key: str) -> bytes | None:
        """Return the stored bytes for ``key``, or None when absent."""
        with self._db() as conn:
            return self._fetch(conn, key)

    def remove(self, key: str) -> bytes | None:
        """Delete ``key`` and return the bytes it held, if any."""
        with self._db() as conn:
            previous = self._fetch(conn, key)
            conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        return previous

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *args) -> None:
        self.close()