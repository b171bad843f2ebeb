"""Mnemonic commands and the key-value manager used by the services."""

from __future__ import annotations

import enum
import getpass
import logging

from .bip39 import new_entropy_w24, phrase_to_entropy, seed
from .errors import (
    Bip39Error,
    CommandError,
    DeserializationError,
    ExistsError,
    FileIoError,
    GetError,
    KvError,
    LogicalError,
    MnemonicError,
    WrongCommandError,
)
from .file_io import FileIo
from .kv import Kv

log = logging.getLogger(__name__)

MNEMONIC_KEY = "mnemonic"


class Cmd(enum.Enum):
    EXISTING = "existing"
    CREATE = "create"
    IMPORT = "import"
    EXPORT = "export"

    @classmethod
    def from_string(cls, cmd_str: str) -> "Cmd":
        try:
            return cls(cmd_str)
        except ValueError:
            raise WrongCommandError(cmd_str) from None

    def exit_after_cmd(self) -> bool:
        """Only ``existing`` keeps the daemon running."""
        return self is not Cmd.EXISTING


class KvManager:
    """Key-value store and export file under one root directory."""

    def __init__(self, root) -> None:
        self.kv = Kv(root)
        self.io = FileIo(root)

    async def _stored_entropy(self) -> bytes:
        value = await self.kv.get(MNEMONIC_KEY)
        if not isinstance(value, bytes):
            raise GetError(DeserializationError())
        return value

    async def seed(self) -> bytes:
        """Return the 64-byte secret recovery key derived from the mnemonic."""
        entropy = await self._stored_entropy()
        try:
            return seed(entropy, "")
        except Bip39Error as err:
            raise MnemonicError(
                f"Invalid mnemonic. Bip39 error: {err}"
            ) from err

    async def handle_mnemonic(self, cmd: Cmd) -> "KvManager":
        handlers = {
            Cmd.EXISTING: self.handle_existing,
            Cmd.CREATE: self.handle_create,
            Cmd.IMPORT: self.handle_import,
            Cmd.EXPORT: self.handle_export,
        }
        try:
            await handlers[cmd]()
        except (KvError, FileIoError, Bip39Error, MnemonicError) as err:
            raise CommandError(cmd.value, err) from err
        return self

    async def handle_existing(self) -> None:
        """Require a stored mnemonic and no plain-text export on disk."""
        self.io.check_if_not_exported()
        if not await self.kv.exists(MNEMONIC_KEY):
            raise ExistsError(LogicalError("Mnemonic not found"))

    async def handle_insert(self, entropy: bytes) -> None:
        try:
            reservation = await self.kv.reserve_key(MNEMONIC_KEY)
        except KvError as err:
            log.error("Cannot reserve mnemonic: %s", err)
            raise
        try:
            await self.kv.put(reservation, bytes(entropy))
        except KvError as err:
            log.error("Cannot put mnemonic in kv store: %s", err)
            raise
        log.info(
            "Mnemonic successfully added in kv store. "
            "Use the `-m export` command to retrieve it."
        )

    async def handle_create(self) -> None:
        log.info("Creating mnemonic")
        entropy = new_entropy_w24()
        await self.handle_insert(entropy)
        self.io.entropy_to_file(entropy)

    async def handle_import(self) -> None:
        log.info("Importing mnemonic")
        try:
            phrase = getpass.getpass("")
        except (OSError, EOFError) as err:
            raise MnemonicError(f"Password error: {err}") from err
        entropy = phrase_to_entropy(phrase)
        await self.handle_insert(entropy)

    async def handle_export(self) -> None:
        log.info("Exporting mnemonic")
        try:
            entropy = await self._stored_entropy()
        except KvError as err:
            log.error("Did not find mnemonic in kv store %s", err)
            raise
        log.info("Mnemonic found in kv store")
        self.io.entropy_to_file(entropy)

    def close(self) -> None:
        self.kv.close()