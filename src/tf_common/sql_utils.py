"""Helpers for ownership-scoped partial UPDATE statements.

Resource repositories use static text() SQL everywhere except partial
updates, where the SET list depends on which fields the caller sent. The
column names still come from a fixed allow-list, never from user input.
"""

from collections.abc import Iterable

from sqlalchemy import TextClause, text


def build_scoped_update(
    table: str,
    columns: Iterable[str],
    allowed: frozenset[str],
    returning: str,
) -> TextClause:
    """UPDATE *table* SET <columns> WHERE id AND user_id match, RETURNING *returning*.

    A single statement so the ownership check and the write are atomic.
    Raises ValueError on a column outside *allowed*.
    """
    cols = list(columns)
    unknown = set(cols) - allowed
    if unknown:
        raise ValueError(f"Columns not updatable on {table}: {sorted(unknown)}")

    assignments = [f"{col} = :{col}" for col in cols]
    assignments.append("updated_at = NOW()")
    return text(
        f"UPDATE {table} SET {', '.join(assignments)} "
        "WHERE id = CAST(:id AS UUID) AND user_id = CAST(:user_id AS UUID) "
        f"RETURNING {returning}"
    )
