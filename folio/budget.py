"""Page size budget for Folio.

A post page must fit in the first round trip of a fresh connection. The
check compares the exact UTF-8 byte length against the budget; a page of
exactly the budget passes.
"""

from __future__ import annotations

from pathlib import Path

from .config import DEFAULT_PAGE_BUDGET
from .errors import Outcome, PageTooLarge


def check_page_size(
    html: str, source: Path, label: str, limit: int = DEFAULT_PAGE_BUDGET
) -> Outcome[int]:
    """Check a rendered page against the byte budget.

    Args:
        html: The page as it will be written.
        source: Source file of the page, for error reporting.
        label: Name of the page in the error message (the post title).
        limit: Budget in bytes.

    Returns:
        Outcome holding the size in bytes, or PageTooLarge.
    """
    size = len(html.encode("utf-8"))
    if size > limit:
        return Outcome.failure(PageTooLarge(source, label, size, limit))
    return Outcome.success(size)
