"""Test class ExpressionLoader."""
import tarfile
import zipfile

import py7zr
from pydantic import ValidationError
import pytest

from polish_notation.batch.loader import ExpressionLoader


def test_load_txt(tmp_path) -> None:
    """A plain text file yields its stripped, non-empty lines."""
    txt = tmp_path / "ops.txt"
    txt.write_text("+ 15 2\n\n  (+ 3 (* 3 2))  \n")
    assert ExpressionLoader.load(txt) == ["+ 15 2", "(+ 3 (* 3 2))"]


def test_load_zip(tmp_path) -> None:
    """A .zip archive is read from its first .txt member."""
    zip_path = tmp_path / "ops.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("ops.txt", "+ 3 3\n")
    assert ExpressionLoader.load(zip_path) == ["+ 3 3"]


def test_load_tar_xz(tmp_path) -> None:
    """A .tar.xz archive is read from its first .txt member."""
    txt = tmp_path / "ops.txt"
    txt.write_text("* 4 4\n")
    tar_path = tmp_path / "ops.tar.xz"
    with tarfile.open(tar_path, "w:xz") as tf:
        tf.add(txt, arcname="ops.txt")
    assert ExpressionLoader.load(tar_path) == ["* 4 4"]


def test_load_7z(tmp_path) -> None:
    """A .7z archive is read from its first .txt member."""
    txt = tmp_path / "ops.txt"
    txt.write_text("- 5 2\n")
    archive_path = tmp_path / "ops.7z"
    with py7zr.SevenZipFile(archive_path, "w") as archive:
        archive.write(txt, arcname="ops.txt")
    assert ExpressionLoader.load(archive_path) == ["- 5 2"]


def test_archive_without_txt(tmp_path) -> None:
    """Extraction fails if no .txt file exists in the archive."""
    zip_path = tmp_path / "empty.zip"
    with zipfile.ZipFile(zip_path, "w") as zf:
        zf.writestr("data.bin", b"\x00\x01")
    with pytest.raises(ValueError):
        ExpressionLoader.load(zip_path)


def test_unsupported_format(tmp_path) -> None:
    """Unsupported formats raise a ValueError."""
    file_path = tmp_path / "ops.rar"
    file_path.write_text("+ 1 1")
    with pytest.raises(ValueError, match="Unsupported"):
        ExpressionLoader.load(file_path)


def test_missing_file(tmp_path) -> None:
    """A path that does not exist is rejected by validation."""
    with pytest.raises(ValidationError):
        ExpressionLoader.load(tmp_path / "missing.txt")
