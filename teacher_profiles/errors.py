"""Error types shared by the store and the HTTP layer."""
from __future__ import annotations

from typing import Any, Iterable

from fastapi.encoders import jsonable_encoder


class ApiError(Exception):
    """An error surfaced to clients as ``{"error": ..., "details": ...}``."""

    def __init__(
        self,
        status_code: int,
        error: str,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


def validation_details(errors: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Field-level errors as JSON, with locations relative to the request body."""
    details = []
    for error in errors:
        item = {key: value for key, value in error.items() if key not in ("ctx", "url")}
        loc = tuple(item.get("loc", ()))
        if loc[:1] == ("body",):
            item["loc"] = loc[1:]
        details.append(item)
    return jsonable_encoder(details)


class UsernameTakenError(ValueError):
    """Raised when a user is created with a username already in use."""

    def __init__(self, username: str) -> None:
        super().__init__(f"Username {username!r} is already taken")
        self.username = username


__all__ = ["ApiError", "UsernameTakenError", "validation_details"]
