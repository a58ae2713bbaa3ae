"""Turn (page, limit, total) into a navigation descriptor."""

from lexicon_search.models.entry import PaginationResult


def paginate(page: int, limit: int, total: int) -> PaginationResult:
    """Compute page count and neighbours.

    Args:
        page: 1-based page number.
        limit: Results per page, at least 1.
        total: Number of rows matching all filters before paging.
    """
    return PaginationResult(
        page=page,
        limit=limit,
        total=total,
        total_pages=(total + limit - 1) // limit,
        has_next=page * limit < total,
        has_prev=page > 1,
    )


def empty_pagination(limit: int) -> PaginationResult:
    """Zeroed block for meta-only responses; it never reflects the requested page."""
    return PaginationResult(
        page=1,
        limit=limit,
        total=0,
        total_pages=0,
        has_next=False,
        has_prev=False,
    )
