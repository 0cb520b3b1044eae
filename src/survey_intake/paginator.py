"""Paginator — splits an ordered question sequence into fixed-size pages.

Pure functions of ``(question_count, page_size)``; no state is kept.  Every
page holds ``page_size`` questions except possibly the last one, which
holds the remainder.  A survey with zero questions has zero pages.

Usage::

    total_pages(52, 10)        # 6
    page_slice(5, 52, 10)      # (50, 52)
    questions[slice(*page_slice(0, 52, 10))]
"""

from __future__ import annotations

from typing import Iterator

from survey_intake.errors import PageOutOfRangeError


def _check_sizes(question_count: int, page_size: int) -> None:
    if page_size <= 0:
        raise ValueError(f"page_size must be > 0, got {page_size}")
    if question_count < 0:
        raise ValueError(f"question_count must be >= 0, got {question_count}")


def total_pages(question_count: int, page_size: int) -> int:
    """Return ``ceil(question_count / page_size)``.

    Raises:
        ValueError: if ``page_size <= 0`` or ``question_count < 0``.
    """
    _check_sizes(question_count, page_size)
    return -(-question_count // page_size)


def page_slice(page_index: int, question_count: int, page_size: int) -> tuple[int, int]:
    """Return ``(start, end)`` positions of a question page.

    ``start`` is inclusive and ``end`` exclusive, so the result can be fed
    straight into ``slice()``.  Only question pages are valid here; the
    terminal info step is handled by the flow controller.

    Raises:
        PageOutOfRangeError: if ``page_index`` is not in
            ``[0, total_pages - 1]``.
        ValueError: if ``page_size <= 0`` or ``question_count < 0``.
    """
    pages = total_pages(question_count, page_size)
    if page_index < 0 or page_index >= pages:
        raise PageOutOfRangeError(page_index, pages)
    start = page_index * page_size
    end = min(start + page_size, question_count)
    return start, end


def iter_page_slices(question_count: int, page_size: int) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` for every question page in order."""
    for page_index in range(total_pages(question_count, page_size)):
        yield page_slice(page_index, question_count, page_size)
