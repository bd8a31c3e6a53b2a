"""Dialect-aware insert-or-ignore.

Emits `INSERT ... ON CONFLICT DO NOTHING` for PostgreSQL and SQLite.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from boxoffice.database.models.base import Base

_INSERT_BUILDERS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def insert_ignore(
    session: Session,
    model: type[Base],
    rows: Sequence[dict[str, Any]],
    conflict_columns: Sequence[str],
) -> int:
    """Insert rows, silently skipping those violating the conflict target.

    Args:
        session: SQLAlchemy session.
        model: Mapped model class.
        rows: Column -> value dicts, all with the same keys.
        conflict_columns: Unique columns identifying duplicates.

    Returns:
        Number of rows actually inserted.

    Raises:
        NotImplementedError: If the dialect has no ON CONFLICT support here.
    """
    if not rows:
        return 0

    dialect = session.get_bind().dialect.name
    builder = _INSERT_BUILDERS.get(dialect)
    if builder is None:
        raise NotImplementedError(f"insert-or-ignore not supported for dialect '{dialect}'")

    stmt = builder(model).values(list(rows)).on_conflict_do_nothing(
        index_elements=list(conflict_columns),
    )
    result = session.execute(stmt)
    return max(result.rowcount, 0)
