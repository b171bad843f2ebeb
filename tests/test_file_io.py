import pytest

from tofnd.bip39 import entropy_to_phrase, new_entropy_w24
from tofnd.errors import ExportExistsError, FileIoError
from tofnd.file_io import FileIo


def test_write(tmp_path):
    entropy = new_entropy_w24()
    io = FileIo(tmp_path)
    io.entropy_to_file(entropy)
    assert io.export_path().read_text(encoding="utf-8") == entropy_to_phrase(entropy)


def test_export_path(tmp_path):
    assert FileIo(tmp_path).export_path() == tmp_path / "export"


def test_check_and_double_write(tmp_path):
    io = FileIo(tmp_path)
    io.check_if_not_exported()
    io.entropy_to_file(new_entropy_w24())
    with pytest.raises(ExportExistsError):
        io.check_if_not_exported()
    with pytest.raises(ExportExistsError):
        io.entropy_to_file(new_entropy_w24())


def test_bad_entropy(tmp_path):
    io = FileIo(tmp_path)
    with pytest.raises(FileIoError):
        io.entropy_to_file(b"\x01" * 15)
    assert not io.export_path().exists()