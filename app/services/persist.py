# app/services/persist.py
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import ConflictError, StorageError
from app.db.integrity import FOREIGN_KEY, UNIQUE, colliding_fields, integrity_kind

log = logging.getLogger(__name__)

# attribute name -> JSON field name used in error messages
FIELD_LABELS = {
    "country_id": "countryId",
    "city_id": "cityId",
    "route_slug": "routeSlug",
}


def field_list(fields: list[str]) -> str:
    return ", ".join(FIELD_LABELS.get(f, f) for f in fields)


def _write_or_raise(
    write: Callable[[], None],
    db: Session,
    model,
    label: str,
    values: Optional[Mapping[str, Any]],
    exclude_id: Optional[int],
    context: str,
) -> None:
    try:
        write()
    except IntegrityError as e:
        db.rollback()
        kind = integrity_kind(e)
        if kind == UNIQUE:
            fields = colliding_fields(db, model, values or {}, exclude_id=exclude_id)
            log.info("%s %s: unique violation on %s", label, context, fields or "unknown")
            if fields:
                raise ConflictError(f"A {label} with this {field_list(fields)} already exists.") from e
            raise ConflictError(f"A {label} with these values already exists.") from e
        if kind == FOREIGN_KEY:
            log.info("%s %s: foreign key violation", label, context)
            raise ConflictError(
                f"This {label} is referenced by other records; remove them first."
            ) from e
        log.exception("%s %s: unexpected integrity error", label, context)
        raise StorageError(f"Failed to save {label}") from e
    except SQLAlchemyError as e:
        db.rollback()
        log.exception("%s %s: storage failure", label, context)
        raise StorageError(f"Failed to save {label}") from e


def commit_or_raise(
    db: Session,
    model,
    label: str,
    values: Optional[Mapping[str, Any]] = None,
    exclude_id: Optional[int] = None,
    context: str = "",
) -> None:
    """
    Commit the unit of work and translate store failures:

    - unique violation -> ConflictError naming the colliding field(s)
    - foreign key violation -> ConflictError (row still referenced / reference missing)
    - anything else -> StorageError, logged with `context`

    The session is rolled back before any of these is raised.
    """
    _write_or_raise(db.commit, db, model, label, values, exclude_id, context)


def flush_or_raise(
    db: Session,
    model,
    label: str,
    values: Optional[Mapping[str, Any]] = None,
    exclude_id: Optional[int] = None,
    context: str = "",
) -> None:
    """Same translation as commit_or_raise, for a flush inside a larger transaction."""
    _write_or_raise(db.flush, db, model, label, values, exclude_id, context)
