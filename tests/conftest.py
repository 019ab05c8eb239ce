"""Shared pytest fixtures for the papernotes test suite."""

import io
import json
import logging

import pytest
from pypdf import PdfReader, PdfWriter

from papernotes.models import ExtractedDocument


# ---------------------------------------------------------------------------
# Logger isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_papernotes_logger():
    """Clear the papernotes logger between tests.

    Tests that call ``main()`` trigger ``setup_logging()``, which attaches
    handlers and sets ``propagate=False``.  Without this fixture the state
    leaks into subsequent tests and breaks ``caplog`` capture.
    """
    logger = logging.getLogger("papernotes")
    for h in logger.handlers[:]:
        h.close()
        logger.removeHandler(h)
    logger.propagate = True
    yield
    for h in logger.handlers[:]:
        h.close()
        logger.removeHandler(h)
    logger.propagate = True


# ---------------------------------------------------------------------------
# PDFs (built in memory; page N is 100 + N points wide so order is checkable)
# ---------------------------------------------------------------------------


def build_pdf(n_pages: int) -> bytes:
    writer = PdfWriter()
    for page_number in range(1, n_pages + 1):
        writer.add_blank_page(width=100 + page_number, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def page_labels(pdf_bytes: bytes) -> list[int]:
    """Return the original 1-based page number of every page in *pdf_bytes*."""
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return [round(float(page.mediabox.width)) - 100 for page in reader.pages]


@pytest.fixture
def five_page_pdf() -> bytes:
    return build_pdf(5)


# ---------------------------------------------------------------------------
# Mock extraction / LLM payloads
# ---------------------------------------------------------------------------

MOCK_ELEMENTS = [
    {
        "type": "Title",
        "element_id": "a1",
        "text": "Attention Is All You Need",
        "metadata": {"page_number": 1, "filename": "x.pdf", "languages": ["eng"]},
    },
    {
        "type": "NarrativeText",
        "element_id": "b2",
        "text": "The dominant sequence transduction models are based on RNNs.",
        "metadata": {"page_number": 1, "filename": "x.pdf"},
    },
    {
        "type": "NarrativeText",
        "element_id": "c3",
        "text": "We propose the Transformer.",
        "metadata": {"page_number": 2, "filename": "x.pdf"},
    },
]

MOCK_NOTE_DICT = {
    "title": "Attention Is All You Need",
    "authors": ["Ashish Vaswani", "Noam Shazeer"],
    "summary": "Introduces the Transformer, an architecture based solely on attention.",
    "category": "method",
    "novel_method": True,
    "novel_dataset": False,
    "novel_results": True,
    "page_numbers": [1, 2],
}


@pytest.fixture
def mock_elements() -> list[dict]:
    return [dict(e, metadata=dict(e["metadata"])) for e in MOCK_ELEMENTS]


@pytest.fixture
def mock_note_dict() -> dict:
    return dict(MOCK_NOTE_DICT)


@pytest.fixture
def mock_tool_arguments() -> str:
    """Raw argument string of a ``format_notes`` call."""
    return json.dumps({"notes": [MOCK_NOTE_DICT]})


@pytest.fixture
def sample_documents() -> list[ExtractedDocument]:
    return [
        ExtractedDocument(page_content="First part.", metadata={"page_number": 1}),
        ExtractedDocument(
            page_content="Second part.",
            metadata={"page_number": 2, "category": "NarrativeText"},
        ),
    ]
