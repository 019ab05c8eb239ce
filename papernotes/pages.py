"""Remove pages from an in-memory PDF with pypdf.

Two numbering policies are supported:

``cumulative`` (default)
    Every page number refers to the *original* document.  Before each removal
    the index is shifted down by the number of already-removed pages that
    came before it, so ``[2, 4]`` on a five-page PDF keeps pages 1, 3 and 5.

``fixed``
    Each number is applied to the document as it stands after the previous
    removal (index ``page - 1`` every time), so ``[2, 4]`` on a five-page PDF
    keeps pages 1, 3 and 4.  Kept for output compatibility with older runs.
"""

import io
import logging
from collections.abc import Sequence

from pypdf import PdfReader, PdfWriter

from papernotes.models import OffsetMode, PageRangeError

logger = logging.getLogger(__name__)


def count_pages(pdf_bytes: bytes) -> int:
    """Return the number of pages in *pdf_bytes*."""
    return len(PdfReader(io.BytesIO(pdf_bytes)).pages)


def delete_pages(
    pdf_bytes: bytes,
    pages: Sequence[int],
    mode: OffsetMode = "cumulative",
) -> bytes:
    """Return a copy of *pdf_bytes* without the given 1-based *pages*.

    Pages are processed in the order given.  Each index is checked against
    the current page count before it is removed.

    Raises:
        PageRangeError: if a page number falls outside the current document.
        ValueError: on an unknown *mode*.
    """
    reader = PdfReader(io.BytesIO(pdf_bytes))
    total = len(reader.pages)
    keep = surviving_page_indices(total, pages, mode)

    writer = PdfWriter()
    for index in keep:
        writer.add_page(reader.pages[index])

    buffer = io.BytesIO()
    writer.write(buffer)
    logger.info(
        "Deleted %d of %d pages (%s mode); %d remain",
        total - len(keep),
        total,
        mode,
        len(keep),
    )
    return buffer.getvalue()


def surviving_page_indices(
    total: int,
    pages: Sequence[int],
    mode: OffsetMode = "cumulative",
) -> list[int]:
    """Return the 0-based original indices left after deleting *pages*.

    This is the pure index arithmetic behind ``delete_pages``; the returned
    list is in original document order.
    """
    if mode not in ("cumulative", "fixed"):
        raise ValueError(f"Unknown page offset mode: {mode!r}")

    remaining = list(range(total))
    removed: set[int] = set()

    for page in pages:
        if mode == "fixed":
            index = page - 1
        else:
            if page in removed:
                logger.warning("Page %d listed more than once; ignoring repeat", page)
                continue
            index = page - 1 - sum(1 for r in removed if r < page)

        if page < 1 or not 0 <= index < len(remaining):
            # Cumulative numbers refer to the original document.
            current = len(remaining) if mode == "fixed" else total
            raise PageRangeError(
                f"Page {page} is out of range for a document with {current} pages"
            )
        remaining.pop(index)
        removed.add(page)

    return remaining
