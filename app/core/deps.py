# app/core/deps.py
from __future__ import annotations

import json
from typing import Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.errors import ValidationError
from app.db.session import get_db  # noqa: F401  (re-exported for routers)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _describe(exc: PydanticValidationError) -> str:
    fields = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p != "body"]
        if loc and loc[0] not in fields:
            fields.append(loc[0])
    if not fields:
        return "Invalid request body"
    return "Missing or invalid required field: " + ", ".join(fields)


async def read_payload(request: Request, schema: Type[SchemaT]) -> SchemaT:
    """
    Parse and validate a JSON body inside the handler.
    Admin routes read their body here (after the auth gate ran) instead of
    declaring a body parameter, so unauthenticated callers never reach parsing.
    """
    try:
        raw = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Invalid request body")
    if not isinstance(raw, dict):
        raise ValidationError("Invalid request body")
    try:
        return schema.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(_describe(e)) from e
