"""Repository interface for teacher profiles, their ratings and users.

Implementations must never raise for a missing record: lookups return
``None`` and boolean operations return ``False`` instead. The HTTP layer turns
those sentinels into 404 responses.
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Callable, Protocol, runtime_checkable

from passlib.context import CryptContext

from ..schemas import (
    Rating,
    SearchFilters,
    SearchResult,
    Teacher,
    TeacherCreate,
    TeacherUpdate,
    User,
    UserCreate,
)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def new_teacher_id() -> str:
    return str(uuid.uuid4())


PWD_CONTEXT = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return PWD_CONTEXT.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return PWD_CONTEXT.verify(password, password_hash)


@runtime_checkable
class TeacherStore(Protocol):
    """Operations every teacher store backend provides."""

    def get_teacher(self, teacher_id: str) -> Teacher | None:
        ...

    def get_all_teachers(self) -> list[Teacher]:
        """All teachers, most recently created first."""
        ...

    def create_teacher(self, payload: TeacherCreate) -> Teacher:
        ...

    def update_teacher(self, teacher_id: str, changes: TeacherUpdate) -> Teacher | None:
        ...

    def delete_teacher(self, teacher_id: str) -> bool:
        """Remove the teacher together with all of its ratings."""
        ...

    def search_teachers(self, filters: SearchFilters) -> SearchResult:
        ...

    def get_teachers_by_domain(self, domain: str) -> list[Teacher]:
        ...

    def increment_session(self, teacher_id: str) -> bool:
        ...

    def add_rating(self, teacher_id: str, score: float) -> Rating | None:
        """Append a rating and refresh the teacher's average.

        Returns ``None`` without storing anything when the teacher is unknown.
        """
        ...

    def get_teacher_ratings(self, teacher_id: str) -> list[Rating]:
        ...

    def calculate_average_rating(self, teacher_id: str) -> float | None:
        ...

    def get_user(self, user_id: int) -> User | None:
        ...

    def get_user_by_username(self, username: str) -> User | None:
        ...

    def create_user(self, payload: UserCreate) -> User:
        """Raises ``UsernameTakenError`` when the username already exists."""
        ...


__all__ = [
    "Clock",
    "TeacherStore",
    "hash_password",
    "verify_password",
    "new_teacher_id",
    "utcnow",
]
