"""Exception types raised by the key-value store and the mnemonic commands."""

from __future__ import annotations

from pathlib import Path


class InnerKvError(Exception):
    """A single operation on the underlying store failed."""


class LogicalError(InnerKvError):
    """The operation is not allowed in the store's current state."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Logical Error: {message}")
        self.message = message


class SerializationError(InnerKvError):
    """A value could not be turned into bytes."""

    def __init__(self) -> None:
        super().__init__("Serialization Error: failed to serialize value")


class DeserializationError(InnerKvError):
    """Stored bytes could not be turned back into a value."""

    def __init__(self) -> None:
        super().__init__("Deserialization Error: failed to deserialize kvstore bytes")


class KvError(Exception):
    """A request to the key-value service failed."""


class _OperationError(KvError):
    prefix = "Kv Error"

    def __init__(self, inner: InnerKvError) -> None:
        super().__init__(f"{self.prefix}: {inner}")
        self.inner = inner


class ReserveError(_OperationError):
    """Reserving a key failed."""

    prefix = "Reserve Error"


class PutError(_OperationError):
    """Storing a value failed."""

    prefix = "Put Error"


class GetError(_OperationError):
    """Reading a value failed."""

    prefix = "Get Error"


class ExistsError(_OperationError):
    """Checking for a key failed."""

    prefix = "Exists Error"


class Bip39Error(Exception):
    """Entropy or a phrase is not a valid BIP-39 mnemonic."""


class FileIoError(Exception):
    """Reading or writing the export file failed."""


class ExportExistsError(FileIoError):
    """An exported mnemonic is already on disk."""

    def __init__(self, path) -> None:
        self.path = Path(path)
        super().__init__(
            f"File {self.path} already exists. "
            "Remove file to use `-m existing` or `-m export` commands."
        )


class MnemonicError(Exception):
    """A mnemonic command failed."""


class WrongCommandError(MnemonicError):
    """The command name is not one of the known mnemonic commands."""

    def __init__(self, command: str) -> None:
        super().__init__(f"Command not found: {command}")
        self.command = command


_COMMAND_PREFIXES = {
    "existing": "Cannot not use existing mnemonic",
    "create": "Cannot create mnemonic",
    "import": "Cannot import mnemonic",
    "export": "Cannot export mnemonic",
}


class CommandError(MnemonicError):
    """Running a known mnemonic command failed; ``inner`` holds the cause."""

    def __init__(self, command: str, inner: Exception) -> None:
        try:
            prefix = _COMMAND_PREFIXES[command]
        except KeyError:
            raise ValueError(f"unknown mnemonic command {command!r}") from None
        super().__init__(f"{prefix}: {inner}")
        self.command = command
        self.inner = inner