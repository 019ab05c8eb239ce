"""Tests for papernotes/fetcher.py — URL validation and download."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from papernotes.fetcher import fetch_pdf, validate_pdf_url
from papernotes.models import InvalidURLError, PaperNotesError


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/paper.PDF",
        "https://example.com/paper.pdf?download=1",
        "https://example.com/paper",
        "https://example.com/paper.pdf/",
        "",
    ],
)
def test_fetch_pdf_rejects_non_pdf_url_before_network(url):
    with patch("papernotes.fetcher.requests.get") as mock_get:
        with pytest.raises(InvalidURLError):
            fetch_pdf(url)
    mock_get.assert_not_called()


def test_invalid_url_error_is_value_error_and_package_error():
    with pytest.raises(ValueError):
        validate_pdf_url("https://example.com/x.html")
    with pytest.raises(PaperNotesError):
        validate_pdf_url("https://example.com/x.html")


def test_validate_pdf_url_accepts_pdf_suffix():
    validate_pdf_url("https://arxiv.org/pdf/2405.00352.pdf")


def test_fetch_pdf_returns_response_bytes():
    response = MagicMock(content=b"%PDF-1.7 body")
    with patch("papernotes.fetcher.requests.get", return_value=response) as mock_get:
        data = fetch_pdf("https://example.com/paper.pdf", timeout_s=30)

    assert data == b"%PDF-1.7 body"
    mock_get.assert_called_once_with("https://example.com/paper.pdf", timeout=30)
    response.raise_for_status.assert_called_once()


def test_fetch_pdf_propagates_http_error_unchanged():
    response = MagicMock()
    error = requests.HTTPError("404 Client Error")
    response.raise_for_status.side_effect = error
    with patch("papernotes.fetcher.requests.get", return_value=response):
        with pytest.raises(requests.HTTPError) as exc_info:
            fetch_pdf("https://example.com/missing.pdf")
    assert exc_info.value is error


def test_fetch_pdf_propagates_connection_error():
    with patch(
        "papernotes.fetcher.requests.get",
        side_effect=requests.ConnectionError("refused"),
    ):
        with pytest.raises(requests.ConnectionError):
            fetch_pdf("https://example.com/paper.pdf")
