"""Error kinds raised by services and mapped onto HTTP responses."""

from __future__ import annotations

from typing import Any

from fastapi import status


class AppError(Exception):
    """Base class for errors that carry an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationError(AppError):
    """Malformed input. Carries pydantic-style field errors."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(detail)
        self.errors = errors or []

    @classmethod
    def from_pydantic(cls, exc) -> "ValidationError":
        errors = [
            {"loc": list(err["loc"]), "msg": err["msg"], "type": err["type"]}
            for err in exc.errors()
        ]
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in errors)
        return cls(f"Invalid input: {fields}" if fields else "Invalid input", errors)


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class PersistenceError(AppError):
    """Underlying store failure on a write path."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
