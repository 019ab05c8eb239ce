"""Download the raw bytes of a remote PDF."""

import logging

import requests

from papernotes.models import InvalidURLError

logger = logging.getLogger(__name__)


def validate_pdf_url(url: str) -> None:
    """Raise ``InvalidURLError`` unless *url* ends in ``.pdf`` (case-sensitive)."""
    if not url.endswith(".pdf"):
        raise InvalidURLError(f"The URL must point to a PDF file: {url!r}")


def fetch_pdf(url: str, timeout_s: int | None = None) -> bytes:
    """Validate *url* and return the body of a GET request as bytes.

    The URL is checked before any connection is opened.  HTTP and network
    errors from ``requests`` propagate unchanged; there is no retry.

    Raises:
        InvalidURLError: if the URL does not end in ``.pdf``.
        requests.RequestException: on connection failure or non-2xx status.
    """
    validate_pdf_url(url)
    logger.info("Downloading %s", url)
    response = requests.get(url, timeout=timeout_s)
    response.raise_for_status()
    data = response.content
    logger.info("Downloaded %s bytes", f"{len(data):,}")
    return data
