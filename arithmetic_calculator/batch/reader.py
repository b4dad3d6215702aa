"""Read arithmetic expressions from a text file or an archive."""
import lzma
from pathlib import Path
import tarfile
import tempfile
from typing import List
import zipfile

import py7zr
import py7zr.exceptions
from pydantic import BaseModel, ConfigDict, Field

from arithmetic_calculator.common.logger import logger


class ExpressionFileReader(BaseModel):
    """
    Load expression files, one arithmetic expression per line.

    Supported inputs:
    - plain .txt files
    - .zip, .tar.xz and .7z archives holding at least one .txt file
    """

    model_config = ConfigDict(frozen=True)

    encoding: str = Field(default="utf-8", description="Text encoding of expression files")

    def read(self, input_file: Path) -> str:
        """
        Return the text content of an expression file or archive.

        :param Path input_file: Path to the .txt file or archive

        :return: File content
        :rtype: str
        :raises ValueError: If the archive format is unsupported or contains no .txt file
        """
        if input_file.suffix == ".txt":
            return input_file.read_text(encoding=self.encoding)
        return self._extract_archive(input_file)

    def read_expressions(self, input_file: Path) -> List[str]:
        """
        Return the non-blank lines of an expression file or archive, stripped.

        :param Path input_file: Path to the .txt file or archive

        :return: Expressions in file order
        :rtype: List[str]
        """
        lines: List[str] = self.read(input_file).splitlines()
        expressions = [line.strip() for line in lines if line.strip()]
        logger.info(f"📄 Loaded {len(expressions)} expressions from {input_file}")
        return expressions

    def _extract_archive(self, archive_path: Path) -> str:
        """
        Extract the first .txt file found in a supported archive and return its content.

        :param Path archive_path: Path to the archive file

        :return: Content of the extracted .txt file
        :rtype: str
        :raises ValueError: If no .txt file is found, the archive is damaged or the format is unsupported
        """
        # Extract into a temporary directory, removed once the content is read
        with tempfile.TemporaryDirectory() as tmpdir:
            tmpdir_path = Path(tmpdir)

            try:
                if archive_path.suffix == ".zip":
                    with zipfile.ZipFile(archive_path, "r") as zf:
                        txt_files = [f for f in zf.namelist() if f.endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in zip archive")
                        zf.extract(txt_files[0], path=tmpdir_path)
                        return (tmpdir_path / txt_files[0]).read_text(encoding=self.encoding)

                elif archive_path.suffixes[-2:] == [".tar", ".xz"]:
                    with tarfile.open(archive_path, "r:xz") as tf:
                        txt_members = [m for m in tf.getmembers() if m.isfile() and m.name.endswith(".txt")]
                        if not txt_members:
                            raise ValueError("📄❌ No .txt file found in tar.xz archive")
                        tf.extract(txt_members[0], path=tmpdir_path, filter="data")
                        return (tmpdir_path / txt_members[0].name).read_text(encoding=self.encoding)

                elif archive_path.suffix == ".7z":
                    with py7zr.SevenZipFile(archive_path, mode="r") as archive:
                        txt_files = [f for f in archive.getnames() if f.endswith(".txt")]
                        if not txt_files:
                            raise ValueError("📄❌ No .txt file found in 7z archive")
                        archive.extract(path=tmpdir_path, targets=[txt_files[0]])
                        return (tmpdir_path / txt_files[0]).read_text(encoding=self.encoding)

            except (zipfile.BadZipFile, tarfile.TarError, lzma.LZMAError, py7zr.exceptions.Bad7zFile) as exc:
                raise ValueError(f"📄❌ Unreadable archive {archive_path}: {exc}") from exc

            raise ValueError(f"📄❌ Unsupported archive format: {''.join(archive_path.suffixes)}")
