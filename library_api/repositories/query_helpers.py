from sqlalchemy import or_

LIKE_ESCAPE = "\\"


def _escape_like(term: str) -> str:
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_any(columns, term: str):
    """Case-insensitive substring match of ``term`` against any of ``columns``.
    ``%`` and ``_`` in the term match themselves, not as wildcards."""
    pattern = f"%{_escape_like(term.strip())}%"
    return or_(*[c.ilike(pattern, escape=LIKE_ESCAPE) for c in columns])
