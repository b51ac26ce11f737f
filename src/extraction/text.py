# src/extraction/text.py - v1
"""Manuscript bytes to text, and text windows sized for a prompt.

Plain text and Markdown are decoded as UTF-8; Word documents go through
python-docx. The content type comes from the stored object, falling back to
the key's extension.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

from manuscriptai.core.errors import MissingPrerequisite, UnsupportedManuscriptError

if TYPE_CHECKING:
    from manuscriptai.storage.base_object_store import BaseObjectStore, StoredObject

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)
TEXT_CONTENT_TYPES = frozenset({"text/plain", "text/markdown", "text/x-markdown"})

_EXTENSION_TYPES = {
    ".txt": "text/plain",
    ".text": "text/plain",
    ".md": "text/markdown",
    ".markdown": "text/markdown",
    ".docx": DOCX_CONTENT_TYPE,
}

MIDDLE_MARKER = "\n\n[... middle section omitted for analysis ...]\n\n"
TAIL_MARKER = "\n\n[... content omitted ...]\n\n"


def resolve_content_type(obj: StoredObject) -> str:
    """Declared content type if we support it, else a guess from the key."""
    declared = obj.content_type.split(";")[0].strip().lower()
    if declared in TEXT_CONTENT_TYPES or declared == DOCX_CONTENT_TYPE:
        return declared
    guessed = _EXTENSION_TYPES.get(PurePosixPath(obj.key).suffix.lower())
    if guessed is not None:
        return guessed
    return declared


def decode_manuscript(obj: StoredObject) -> str:
    """Return the manuscript text.

    Raises:
        UnsupportedManuscriptError: For content types we cannot read.
    """
    content_type = resolve_content_type(obj)
    if content_type in TEXT_CONTENT_TYPES:
        return obj.body.decode("utf-8", errors="replace")
    if content_type == DOCX_CONTENT_TYPE:
        return _docx_text(obj.body)
    raise UnsupportedManuscriptError(
        f"Unsupported manuscript type {content_type or 'unknown'!r} for {obj.key}"
    )


def _docx_text(body: bytes) -> str:
    """Paragraph text of a Word document, one paragraph per block."""
    try:
        import docx
    except ImportError as e:
        raise ImportError(
            "python-docx package required for DOCX manuscripts: "
            "pip install python-docx"
        ) from e

    from docx.opc.exceptions import PackageNotFoundError

    try:
        document = docx.Document(io.BytesIO(body))
    except (zipfile.BadZipFile, PackageNotFoundError, ValueError, KeyError, OSError) as e:
        raise UnsupportedManuscriptError(f"Unreadable DOCX manuscript: {e}") from e
    paragraphs = [p.text for p in document.paragraphs if p.text.strip()]
    return "\n\n".join(paragraphs)


async def load_manuscript_text(store: BaseObjectStore, manuscript_key: str) -> str:
    """Fetch and decode the raw manuscript.

    Raises:
        MissingPrerequisite: If no object exists at the manuscript key.
    """
    obj = await store.get(manuscript_key)
    if obj is None:
        raise MissingPrerequisite(f"Manuscript {manuscript_key} not found")
    text = decode_manuscript(obj)
    logger.debug("Loaded manuscript %s (%d chars)", manuscript_key, len(text))
    return text


def head_window(text: str, limit: int) -> str:
    """First ``limit`` characters."""
    return text[:limit]


def balanced_window(text: str, limit: int) -> str:
    """Keep 40% head, 20% around the middle and 40% tail of the text."""
    if len(text) <= limit:
        return text

    head = int(limit * 0.4)
    middle = int(limit * 0.2)
    tail = int(limit * 0.4)
    centre = len(text) // 2
    mid_start = centre - middle // 2

    return (
        text[:head]
        + MIDDLE_MARKER
        + text[mid_start : mid_start + middle]
        + TAIL_MARKER
        + text[len(text) - tail :]
    )
