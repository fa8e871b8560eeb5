"""Transcript domain entity and upload intake rules."""

import io
import logging
import zipfile
from dataclasses import dataclass
from pathlib import PurePath

from docx import Document
from docx.opc.exceptions import PackageNotFoundError

from meetscribe.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = (".txt", ".docx")
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class Transcript:
    """Represents an accepted meeting transcript upload."""

    filename: str
    size: int
    content: str

    @staticmethod
    def _extension(filename: str) -> str:
        return PurePath(filename).suffix.lower()

    @staticmethod
    def _extract_docx_text(data: bytes) -> str:
        """Extract paragraph and table text from a Word document."""
        try:
            document = Document(io.BytesIO(data))
        except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
            logger.warning(f"Unreadable .docx upload: {e}")
            raise ValidationError("File appears to be empty or unreadable") from e

        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.append("\t".join(cell.text for cell in row.cells))
        return "\n".join(lines)

    @classmethod
    def check_upload(
        cls,
        filename: str | None,
        size: int,
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> str:
        """Reject an upload by name and size before its content is read.

        Returns:
            The accepted file name
        """
        if not filename:
            raise ValidationError("No file uploaded")
        if cls._extension(filename) not in ALLOWED_EXTENSIONS:
            raise ValidationError("Only .txt and .docx files are allowed")
        if size > max_bytes:
            limit_mb = max_bytes // (1024 * 1024)
            raise ValidationError(f"File exceeds the {limit_mb}MB size limit")
        return filename

    @classmethod
    def from_upload(
        cls,
        filename: str | None,
        data: bytes,
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> "Transcript":
        """Validate an uploaded file and extract its text.

        Args:
            filename: Client-supplied file name, used for the extension check
            data: Raw file bytes
            max_bytes: Upper bound on the file size

        Returns:
            Transcript with the decoded text

        Raises:
            ValidationError: Missing file, disallowed extension, oversize, or
                no readable text
        """
        filename = cls.check_upload(filename, len(data), max_bytes)

        if cls._extension(filename) == ".docx":
            content = cls._extract_docx_text(data)
        else:
            content = data.decode("utf-8", errors="replace")

        if not content.strip():
            raise ValidationError("File appears to be empty or unreadable")

        return cls(filename=filename, size=len(data), content=content)
