# app/db/integrity.py
"""
Map driver-level integrity errors onto the two kinds the handlers care about,
using the structured codes each DBAPI exposes rather than message text:

- SQLite (Python 3.11+): ``sqlite_errorname`` on the sqlite3 exception
- MySQL (PyMySQL): errno in ``args[0]``
- PostgreSQL (psycopg / psycopg2): SQLSTATE in ``sqlstate`` / ``pgcode``
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from sqlalchemy import UniqueConstraint, and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

UNIQUE = "unique"
FOREIGN_KEY = "foreign_key"

_SQLITE_KINDS = {
    "SQLITE_CONSTRAINT_UNIQUE": UNIQUE,
    "SQLITE_CONSTRAINT_PRIMARYKEY": UNIQUE,
    "SQLITE_CONSTRAINT_FOREIGNKEY": FOREIGN_KEY,
}
_MYSQL_KINDS = {1062: UNIQUE, 1451: FOREIGN_KEY, 1452: FOREIGN_KEY}
_PG_KINDS = {"23505": UNIQUE, "23503": FOREIGN_KEY}


def integrity_kind(exc: IntegrityError) -> Optional[str]:
    orig = getattr(exc, "orig", None)
    if orig is None:
        return None

    name = getattr(orig, "sqlite_errorname", None)
    if name:
        return _SQLITE_KINDS.get(name)

    state = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if state:
        return _PG_KINDS.get(state)

    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int):
        return _MYSQL_KINDS.get(args[0])
    return None


def unique_constraints(model) -> Iterable[UniqueConstraint]:
    return [c for c in model.__table__.constraints if isinstance(c, UniqueConstraint)]


def colliding_fields(
    db: Session,
    model,
    values: Mapping[str, Any],
    exclude_id: Optional[int] = None,
) -> list[str]:
    """
    Return the attribute names of every unique constraint on `model` whose
    columns already hold `values` in another row. Must run after the failed
    transaction was rolled back.
    """
    found: list[str] = []
    for constraint in unique_constraints(model):
        cols = list(constraint.columns)
        if not all(c.key in values for c in cols):
            continue
        stmt = select(model.id).where(and_(*[c == values[c.key] for c in cols]))
        if exclude_id is not None:
            stmt = stmt.where(model.id != exclude_id)
        if db.execute(stmt.limit(1)).first() is not None:
            for c in cols:
                if c.key not in found:
                    found.append(c.key)
    return found
