"""Tests for transcript upload intake: extension, size, decoding."""

import io

import pytest
from docx import Document

from meetscribe.domain.transcript import Transcript
from meetscribe.errors import ValidationError


def _make_docx(*paragraphs: str) -> bytes:
    """Build a Word document in memory."""
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class TestTextUploads:
    """Tests for .txt decoding."""

    def test_content_matches_raw_bytes(self):
        data = "Q1 planning notes\nAlice: ship it".encode()
        transcript = Transcript.from_upload("notes.txt", data)
        assert transcript.content == data.decode("utf-8")
        assert transcript.size == len(data)
        assert transcript.filename == "notes.txt"

    def test_unicode_preserved(self):
        data = "Réunion: 日本語 ✓".encode()
        assert Transcript.from_upload("notes.txt", data).content == "Réunion: 日本語 ✓"

    def test_uppercase_extension_allowed(self):
        assert Transcript.from_upload("NOTES.TXT", b"hello").content == "hello"

    def test_invalid_utf8_is_replaced_not_rejected(self):
        transcript = Transcript.from_upload("notes.txt", b"ok \xff ok")
        assert "�" in transcript.content

    def test_empty_file_rejected(self):
        with pytest.raises(ValidationError, match="empty or unreadable"):
            Transcript.from_upload("notes.txt", b"")

    def test_whitespace_only_rejected(self):
        with pytest.raises(ValidationError, match="empty or unreadable"):
            Transcript.from_upload("notes.txt", b"  \n\t ")


class TestDocxUploads:
    """Tests for .docx text extraction."""

    def test_paragraphs_extracted(self):
        data = _make_docx("Agenda", "Decision: launch in May")
        transcript = Transcript.from_upload("meeting.docx", data)
        assert "Agenda" in transcript.content
        assert "Decision: launch in May" in transcript.content
        assert "PK" not in transcript.content

    def test_table_cells_extracted(self):
        document = Document()
        table = document.add_table(rows=1, cols=2)
        table.rows[0].cells[0].text = "Owner"
        table.rows[0].cells[1].text = "Bob"
        buffer = io.BytesIO()
        document.save(buffer)

        transcript = Transcript.from_upload("meeting.docx", buffer.getvalue())
        assert "Owner\tBob" in transcript.content

    def test_corrupt_docx_rejected(self):
        with pytest.raises(ValidationError, match="empty or unreadable"):
            Transcript.from_upload("meeting.docx", b"this is not a zip archive")

    def test_empty_docx_rejected(self):
        with pytest.raises(ValidationError, match="empty or unreadable"):
            Transcript.from_upload("meeting.docx", _make_docx())


class TestUploadRejection:
    """Tests for name and size checks."""

    @pytest.mark.parametrize("filename", ["notes.pdf", "notes.md", "notes", "notes.txt.exe"])
    def test_disallowed_extension(self, filename):
        with pytest.raises(ValidationError, match="Only .txt and .docx"):
            Transcript.from_upload(filename, b"content")

    def test_missing_filename(self):
        with pytest.raises(ValidationError, match="No file uploaded"):
            Transcript.from_upload(None, b"content")

    def test_check_upload_returns_accepted_name(self):
        assert Transcript.check_upload("notes.TXT", 10) == "notes.TXT"

    def test_oversize_rejected(self):
        data = b"a" * (10 * 1024 * 1024 + 1)
        with pytest.raises(ValidationError, match="10MB"):
            Transcript.from_upload("big.txt", data)

    def test_exactly_at_limit_accepted(self):
        data = b"a" * (10 * 1024 * 1024)
        assert Transcript.from_upload("big.txt", data).size == 10 * 1024 * 1024

    def test_custom_limit(self):
        with pytest.raises(ValidationError):
            Transcript.from_upload("notes.txt", b"12345", max_bytes=4)
