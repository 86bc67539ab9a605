# app/core/errors.py
"""
Error taxonomy shared by the admin API and the public read surface.

Every AppError is rendered as JSON ``{"error": message}`` with its status code
by the handlers registered in app.main.
"""
from __future__ import annotations


class AppError(Exception):
    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Conflict"


class StorageError(AppError):
    status_code = 500
    default_message = "Internal server error"
