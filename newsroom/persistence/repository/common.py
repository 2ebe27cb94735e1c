"""Helpers shared by the PostgreSQL repositories."""


def like_pattern(term: str) -> str:
    """Substring pattern for ILIKE with ``%``, ``_`` and ``\\`` escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
