"""Asynchronous handle to a key-value store kept under a root directory."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

from .errors import ExistsError, GetError, InnerKvError, KvError, PutError, ReserveError
from .store import DEFAULT_KV_NAME, DEFAULT_KV_PATH, KeyReservation, Store

log = logging.getLogger(__name__)

T = TypeVar("T")


def _open_store(db_name) -> Store:
    log.info("START: open kvstore")
    try:
        store = Store(db_name)
    except InnerKvError as err:
        raise KvError(f"Kv initialization Error: {err}") from err
    log.info("DONE: open kvstore")
    if store.was_recovered:
        log.info("kv_manager found existing db [%s]", db_name)
    else:
        log.info("kv_manager cannot open existing db [%s]. creating new db", db_name)
    return store


class Kv:
    """Key-value service; the store lives at ``root/kvstore/kv``.

    Store operations run in a worker thread, one at a time, so callers on the
    event loop are never blocked by disk access.
    """

    def __init__(self, root) -> None:
        self._store = _open_store(Path(root) / DEFAULT_KV_PATH / DEFAULT_KV_NAME)

    @classmethod
    def with_db_name(cls, full_db_name) -> "Kv":
        """Open the store at exactly ``full_db_name``."""
        kv = cls.__new__(cls)
        kv._store = _open_store(full_db_name)
        return kv

    @property
    def path(self) -> Path:
        return self._store.path

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(func, *args)

    async def reserve_key(self, key: str) -> KeyReservation:
        try:
            return await self._run(self._store.reserve, key)
        except InnerKvError as err:
            raise ReserveError(err) from err

    async def unreserve_key(self, reservation: KeyReservation) -> None:
        try:
            await self._run(self._store.remove, reservation.key)
        except InnerKvError as err:
            log.warning("could not remove reservation <%s>: %s", reservation.key, err)

    async def put(self, reservation: KeyReservation, value: Any) -> None:
        try:
            await self._run(self._store.put, reservation, value)
        except InnerKvError as err:
            raise PutError(err) from err

    async def get(self, key: str) -> Any:
        try:
            return await self._run(self._store.get, key)
        except InnerKvError as err:
            raise GetError(err) from err

    async def exists(self, key: str) -> bool:
        try:
            return await self._run(self._store.exists, key)
        except InnerKvError as err:
            raise ExistsError(err) from err

    def close(self) -> None:
        self._store.close()
        log.info("kv_manager stop")