# backend/journal/utils/sql.py
"""
SQL utility functions.

- escape_like_pattern: Escape special characters in LIKE patterns

Usage:
    from journal.utils.sql import escape_like_pattern

    # Trade history search over pair and notes
    safe_pattern = f"%{escape_like_pattern(search)}%"
    query = query.where(Trade.notes.ilike(safe_pattern, escape="\\\\"))
"""

# Escape character passed to ilike(..., escape=LIKE_ESCAPE_CHAR)
LIKE_ESCAPE_CHAR = "\\"


def escape_like_pattern(value: str) -> str:
    """
    Escape special characters in a SQL LIKE pattern.

    SQL LIKE patterns use special characters:
    - % matches any sequence of characters
    - _ matches any single character
    - \\ is the escape character

    A search term typed into the trade history box ("50%", "gold_run")
    must match literally, so these are escaped.

    Args:
        value: The user-provided search string

    Returns:
        The escaped string safe for use in LIKE patterns

    Example:
        >>> escape_like_pattern("50%")
        '50\\\\%'
        >>> escape_like_pattern("gold_run")
        'gold\\\\_run'
    """
    # Backslash first, since it is the escape character
    return (
        value
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
