"""Save, load and flatten extracted documents.

A documents file is a JSON array of ``{"pageContent": ..., "metadata": {...}}``
objects, the same shape LangChain uses, so extraction can be run once and its
output re-used for many note-generation runs.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from papernotes.models import DocumentsFormatError, ExtractedDocument

logger = logging.getLogger(__name__)

_DOCUMENTS_ADAPTER = TypeAdapter(list[ExtractedDocument])


def format_documents_as_string(documents: Sequence[ExtractedDocument]) -> str:
    """Join the text of every document, in order, separated by blank lines."""
    return "\n\n".join(doc.page_content for doc in documents)


def write_documents(documents: Sequence[ExtractedDocument], path: Path) -> None:
    """Write *documents* to *path* as a JSON array, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [doc.model_dump(by_alias=True) for doc in documents]
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    logger.info("Saved %d documents to %s", len(documents), path)


def read_documents(path: Path) -> list[ExtractedDocument]:
    """Load a documents file written by ``write_documents``.

    Raises:
        FileNotFoundError: if *path* does not exist.
        DocumentsFormatError: if the file is not valid JSON or does not match
            the documents shape.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DocumentsFormatError(f"{path} is not UTF-8 text: {exc.reason}") from exc
    try:
        documents = _DOCUMENTS_ADAPTER.validate_json(raw)
    except ValidationError as exc:
        raise DocumentsFormatError(
            f"{path} is not a valid documents file: {exc.error_count()} error(s)"
        ) from exc
    logger.info("Loaded %d documents from %s", len(documents), path)
    return documents
