from board.config import settings


def get_pagination_bar_numbers(
    current_page: int, total_pages: int, bar_length: int | None = None
) -> list[int]:
    """
    Return the zero-based page numbers to show in a pagination bar.

    The window holds ``min(bar_length, total_pages)`` consecutive pages,
    centred on *current_page* and slid inwards near either end so it never
    leaves ``[0, total_pages)``.  Out-of-range arguments are clamped.

    >>> get_pagination_bar_numbers(0, 10)
    [0, 1, 2, 3, 4]
    >>> get_pagination_bar_numbers(5, 10)
    [3, 4, 5, 6, 7]
    >>> get_pagination_bar_numbers(9, 10)
    [5, 6, 7, 8, 9]
    """
    if bar_length is None:
        bar_length = settings.PAGINATION_BAR_LENGTH
    if total_pages <= 0:
        return []

    bar_length = max(bar_length, 1)
    current_page = min(max(current_page, 0), total_pages - 1)

    start = max(min(current_page - bar_length // 2, total_pages - bar_length), 0)
    end = min(start + bar_length, total_pages)
    return list(range(start, end))
