"""Load prefix expressions from text files and archives."""
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr
from pydantic import FilePath, validate_call

from polish_notation.common.logger import logger


class ExpressionLoader:
    """
    Read one prefix expression per line from a plain text file or an archive.

    Supported inputs:
        - .txt
        - .zip, .tar.xz and .7z archives holding at least one .txt file (the first one is read)
    """

    @staticmethod
    @validate_call
    def load(path: FilePath) -> List[str]:
        """
        Return the non-empty, stripped lines of the input.

        :param FilePath path: Path to the text file or archive

        :return: List of expressions
        :rtype: List[str]
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        if path.suffix == ".txt":
            content = path.read_text(encoding="utf-8")
        else:
            content = ExpressionLoader._extract_archive(path)

        expressions = [line.strip() for line in content.splitlines() if line.strip()]
        logger.info(f"🗂️ Loaded {len(expressions)} expressions from {path}")
        return expressions

    @staticmethod
    def _extract_archive(archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found or format is unsupported
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)
            if archive_path.suffix == ".zip":
                with zipfile.ZipFile(archive_path, "r") as zf:
                    txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in zip archive")
                    return zf.read(txt_files[0]).decode("utf-8")

            elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                with tarfile.open(archive_path, "r:xz") as tf:
                    members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                    if not members:
                        raise ValueError("📄❌ No .txt file found in tar.xz archive")
                    tf.extract(members[0], path=tmpdir_path, filter="data")
                    return (tmpdir_path / members[0].name).read_text(encoding="utf-8")

            elif archive_path.suffix == ".7z":
                with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                    txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                    if not txt_files:
                        raise ValueError("📄❌ No .txt file found in 7z archive")
                    archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                    return (tmpdir_path / txt_files[0]).read_text(encoding="utf-8")

            raise ValueError(f"📄❌ Unsupported archive format: {''.join(archive_path.suffixes)}")
