"""Tests for papernotes/pages.py — page deletion with pypdf."""

import pytest

from conftest import build_pdf, page_labels
from papernotes.models import PageRangeError
from papernotes.pages import count_pages, delete_pages, surviving_page_indices


# ---------------------------------------------------------------------------
# surviving_page_indices (pure index arithmetic)
# ---------------------------------------------------------------------------


def test_cumulative_refers_to_original_numbers():
    assert surviving_page_indices(5, [2, 4]) == [0, 2, 4]


def test_cumulative_is_order_independent():
    assert surviving_page_indices(5, [4, 2]) == surviving_page_indices(5, [2, 4])


def test_cumulative_ignores_repeats():
    assert surviving_page_indices(5, [3, 3]) == [0, 1, 3, 4]


def test_fixed_applies_each_number_to_current_document():
    # Removing page 2 shifts original page 5 to position 4.
    assert surviving_page_indices(5, [2, 4]) != surviving_page_indices(
        5, [2, 4], mode="fixed"
    )
    assert surviving_page_indices(5, [2, 4], mode="fixed") == [0, 2, 3]


def test_fixed_out_of_range_after_shrinking():
    with pytest.raises(PageRangeError):
        surviving_page_indices(3, [1, 3], mode="fixed")


@pytest.mark.parametrize("pages", [[0], [-1], [6], [1, 6]])
def test_out_of_range_raises(pages):
    with pytest.raises(PageRangeError):
        surviving_page_indices(5, pages)


def test_unknown_mode_raises():
    with pytest.raises(ValueError, match="offset mode"):
        surviving_page_indices(5, [1], mode="sideways")


def test_empty_list_keeps_everything():
    assert surviving_page_indices(3, []) == [0, 1, 2]


def test_deleting_every_page_leaves_none():
    assert surviving_page_indices(3, [3, 1, 2]) == []


# ---------------------------------------------------------------------------
# delete_pages (real PDFs)
# ---------------------------------------------------------------------------


def test_count_pages(five_page_pdf):
    assert count_pages(five_page_pdf) == 5


def test_delete_pages_page_count_and_order(five_page_pdf):
    result = delete_pages(five_page_pdf, [1, 4])
    assert count_pages(result) == 3
    assert page_labels(result) == [2, 3, 5]


def test_delete_pages_fixed_mode_matches_legacy_behaviour(five_page_pdf):
    result = delete_pages(five_page_pdf, [1, 4], mode="fixed")
    assert page_labels(result) == [2, 3, 4]


@pytest.mark.parametrize("deletions", [[1], [5], [2, 3], [5, 1, 3], [1, 2, 3, 4]])
def test_delete_pages_leaves_n_minus_len_pages_in_order(deletions):
    pdf = build_pdf(5)
    result = delete_pages(pdf, deletions)
    expected = [p for p in range(1, 6) if p not in deletions]
    assert page_labels(result) == expected


def test_delete_pages_out_of_range_raises(five_page_pdf):
    with pytest.raises(PageRangeError, match="Page 9"):
        delete_pages(five_page_pdf, [9])


def test_delete_pages_logs_summary(five_page_pdf, caplog):
    with caplog.at_level("INFO", logger="papernotes.pages"):
        delete_pages(five_page_pdf, [2])
    assert any("Deleted 1 of 5 pages" in r.message for r in caplog.records)


def test_cumulative_error_reports_original_page_count():
    with pytest.raises(PageRangeError, match="document with 5 pages"):
        surviving_page_indices(5, [1, 6])


def test_fixed_error_reports_current_page_count():
    with pytest.raises(PageRangeError, match="document with 4 pages"):
        surviving_page_indices(5, [1, 6], mode="fixed")
