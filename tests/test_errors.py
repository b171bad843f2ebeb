from pathlib import Path

import pytest

from tofnd.errors import (
    CommandError,
    DeserializationError,
    ExistsError,
    ExportExistsError,
    FileIoError,
    GetError,
    InnerKvError,
    KvError,
    LogicalError,
    MnemonicError,
    PutError,
    ReserveError,
    SerializationError,
    WrongCommandError,
)


def test_logical_error_message():
    err = LogicalError("double deletion")
    assert str(err) == "Logical Error: double deletion"
    assert err.message == "double deletion"
    assert isinstance(err, InnerKvError)


def test_serialization_messages():
    assert str(SerializationError()) == "Serialization Error: failed to serialize value"
    assert (
        str(DeserializationError())
        == "Deserialization Error: failed to deserialize kvstore bytes"
    )


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (ReserveError, "Reserve Error: "),
        (PutError, "Put Error: "),
        (GetError, "Get Error: "),
    ],
)
def test_operation_errors_wrap_inner(cls, prefix):
    inner = LogicalError("x")
    err = cls(inner)
    assert err.inner is inner
    assert isinstance(err, KvError)
    assert str(err) == prefix + str(inner)


def test_exists_error_keeps_inner():
    inner = LogicalError("Mnemonic not found")
    err = ExistsError(inner)
    assert err.inner is inner
    assert str(err).endswith("Mnemonic not found")


def test_export_exists_error(tmp_path):
    path = tmp_path / "export"
    err = ExportExistsError(path)
    assert isinstance(err, FileIoError)
    assert err.path == Path(path)
    assert str(path) in str(err)
    assert "Remove file to use `-m existing` or `-m export` commands." in str(err)


def test_wrong_command():
    err = WrongCommandError("bogus")
    assert isinstance(err, MnemonicError)
    assert str(err) == "Command not found: bogus"
    assert err.command == "bogus"


def test_command_error_wraps_cause():
    inner = LogicalError("x")
    err = CommandError("create", inner)
    assert err.inner is inner
    assert err.command == "create"
    assert str(err) == f"Cannot create mnemonic: {inner}"


def test_command_error_existing_prefix():
    err = CommandError("existing", LogicalError("y"))
    assert str(err).startswith("Cannot not use existing mnemonic: ")


def test_command_error_unknown_command():
    with pytest.raises(ValueError):
        CommandError("nothing", LogicalError("z"))