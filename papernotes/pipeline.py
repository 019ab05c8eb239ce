"""Per-paper orchestration — converts one PDF URL to a list of notes.

Steps run strictly in order; each step's output is the next step's input.
Errors are not wrapped here: the CLI decides which ones are reported as a
clean failure.
"""

import logging
from pathlib import Path

from papernotes.documents import read_documents, write_documents
from papernotes.extractor import create_extractor
from papernotes.fetcher import fetch_pdf, validate_pdf_url
from papernotes.llm import ChatClient, create_client
from papernotes.models import ArxivPaperNote, Config, ExtractedDocument
from papernotes.notes import generate_notes
from papernotes.pages import delete_pages

logger = logging.getLogger(__name__)

DOCUMENTS_DIR = Path("documents")


def default_documents_path(name: str) -> Path:
    """Return ``documents/<name>.json``, where saved extractions go by default."""
    return DOCUMENTS_DIR / f"{name}.json"


def run_pipeline(config: Config, client: ChatClient | None = None) -> list[ArxivPaperNote]:
    """Run the whole pipeline for ``config.url`` and return the notes.

    Steps
    -----
    1. Validate the URL (before any I/O).
    2. Load documents from ``config.documents_in``, or fetch the PDF, strip
       ``config.pages_to_delete`` and extract it (saving to
       ``config.documents_out`` when set).
    3. Generate notes with *client*, or one built from *config*.
    """
    validate_pdf_url(config.url)
    # Build the client up front so a missing key fails before any download.
    if client is None:
        client = create_client(config)

    if config.documents_in is not None:
        _warn_ignored_options(config)
        logger.info("Using pre-extracted documents from %s", config.documents_in)
        documents = read_documents(config.documents_in)
    else:
        documents = _extract_from_url(config)

    notes = generate_notes(documents, client)
    logger.info("Generated %d note(s) for %s", len(notes), config.name)
    return notes


def _warn_ignored_options(config: Config) -> None:
    """Log options that have no effect when documents come from a file."""
    if config.pages_to_delete:
        logger.warning(
            "Ignoring pages to delete %s: documents are read from %s",
            config.pages_to_delete,
            config.documents_in,
        )
    if config.documents_out is not None:
        logger.warning(
            "Not saving documents to %s: documents are read from %s",
            config.documents_out,
            config.documents_in,
        )


def _extract_from_url(config: Config) -> list[ExtractedDocument]:
    # Build the extractor first so a missing key fails before the download.
    extractor = create_extractor(config)

    pdf_bytes = fetch_pdf(config.url, timeout_s=config.timeout_s)
    if config.pages_to_delete:
        pdf_bytes = delete_pages(
            pdf_bytes, config.pages_to_delete, mode=config.page_offset_mode
        )

    documents = extractor.extract(pdf_bytes)
    if config.documents_out is not None:
        write_documents(documents, config.documents_out)
    return documents
