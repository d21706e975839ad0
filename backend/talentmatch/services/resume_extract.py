from __future__ import annotations

import re
from collections.abc import Iterable
from io import BytesIO
from pathlib import PurePath

from docx import Document
from pypdf import PdfReader

SUPPORTED_SUFFIXES = (".pdf", ".doc", ".docx")

# Binary noise left over when a legacy .doc is read as text.
_DOC_NOISE_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]+")


def extract_text_from_upload(filename: str, content: bytes) -> str:
    suffix = PurePath(filename or "").suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ValueError("Only PDF, DOC, and DOCX files are allowed")

    if suffix == ".pdf":
        return _extract_pdf(content)
    if suffix == ".docx":
        return _extract_docx(content)
    return _extract_legacy_doc(content)


def _extract_pdf(content: bytes) -> str:
    reader = PdfReader(BytesIO(content))
    if reader.is_encrypted:
        raise ValueError("Password-protected PDF files are not supported")
    return _join_lines(page.extract_text() or "" for page in reader.pages)


def _extract_docx(content: bytes) -> str:
    doc = Document(BytesIO(content))
    # Resume templates often lay out skills and dates in tables.
    cells = (cell.text for table in doc.tables for row in table.rows for cell in row.cells)
    return _join_lines([*(p.text for p in doc.paragraphs), *cells])


def _extract_legacy_doc(content: bytes) -> str:
    # No .doc parser is available; plain text runs survive a lenient decode.
    return _join_lines(_DOC_NOISE_RE.sub("\n", content.decode("utf-8", errors="replace")).splitlines())


def _join_lines(chunks: Iterable[str]) -> str:
    return "\n".join(chunk.strip() for chunk in chunks if chunk and chunk.strip())
