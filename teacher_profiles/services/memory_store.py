"""Process-local teacher store backed by plain dictionaries."""
from __future__ import annotations

import copy
import itertools
import logging
import threading

from ..errors import UsernameTakenError
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
from .search import filter_teachers, mean_rating, paginate
from .store import Clock, hash_password, new_teacher_id, utcnow

LOGGER = logging.getLogger(__name__)


class InMemoryTeacherStore:
    """Thread-safe in-memory store; everything is lost when the process exits.

    Records handed out are copies, so callers cannot mutate stored state.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or utcnow
        self._lock = threading.Lock()
        self._teachers: dict[str, Teacher] = {}
        self._ratings: dict[str, list[Rating]] = {}
        self._users: dict[int, User] = {}
        self._rating_ids = itertools.count(1)
        self._user_ids = itertools.count(1)

    # -- teachers -----------------------------------------------------------

    def get_teacher(self, teacher_id: str) -> Teacher | None:
        with self._lock:
            teacher = self._teachers.get(teacher_id)
            return teacher.model_copy(deep=True) if teacher else None

    def get_all_teachers(self) -> list[Teacher]:
        with self._lock:
            # Newest insert first among equal timestamps.
            teachers = sorted(
                reversed(list(self._teachers.values())),
                key=lambda teacher: teacher.created_at,
                reverse=True,
            )
            return [teacher.model_copy(deep=True) for teacher in teachers]

    def create_teacher(self, payload: TeacherCreate) -> Teacher:
        now = self._clock()
        teacher = Teacher(
            id=new_teacher_id(),
            total_sessions=0,
            average_rating=None,
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        with self._lock:
            self._teachers[teacher.id] = teacher
        LOGGER.info("Created teacher %s (%s)", teacher.id, teacher.name)
        return teacher.model_copy(deep=True)

    def update_teacher(self, teacher_id: str, changes: TeacherUpdate) -> Teacher | None:
        update = copy.deepcopy(changes.changes())
        with self._lock:
            teacher = self._teachers.get(teacher_id)
            if teacher is None:
                return None
            update["updated_at"] = self._clock()
            updated = teacher.model_copy(update=update)
            self._teachers[teacher_id] = updated
            return updated.model_copy(deep=True)

    def delete_teacher(self, teacher_id: str) -> bool:
        with self._lock:
            if self._teachers.pop(teacher_id, None) is None:
                return False
            self._ratings.pop(teacher_id, None)
        LOGGER.info("Deleted teacher %s", teacher_id)
        return True

    def search_teachers(self, filters: SearchFilters) -> SearchResult:
        with self._lock:
            candidates = list(self._teachers.values())
        matches = filter_teachers(candidates, filters)
        page, pagination = paginate(matches, filters.page, filters.limit)
        return SearchResult(
            teachers=[teacher.model_copy(deep=True) for teacher in page],
            pagination=pagination,
        )

    def get_teachers_by_domain(self, domain: str) -> list[Teacher]:
        wanted = domain.lower()
        with self._lock:
            return [
                teacher.model_copy(deep=True)
                for teacher in self._teachers.values()
                if teacher.specialization.primary_domain.lower() == wanted
            ]

    def increment_session(self, teacher_id: str) -> bool:
        with self._lock:
            teacher = self._teachers.get(teacher_id)
            if teacher is None:
                return False
            self._teachers[teacher_id] = teacher.model_copy(
                update={
                    "total_sessions": teacher.total_sessions + 1,
                    "updated_at": self._clock(),
                }
            )
        return True

    # -- ratings ------------------------------------------------------------

    def add_rating(self, teacher_id: str, score: float) -> Rating | None:
        with self._lock:
            teacher = self._teachers.get(teacher_id)
            if teacher is None:
                return None
            now = self._clock()
            rating = Rating(
                id=next(self._rating_ids),
                teacher_id=teacher_id,
                rating=score,
                created_at=now,
            )
            ratings = self._ratings.setdefault(teacher_id, [])
            ratings.append(rating)
            self._teachers[teacher_id] = teacher.model_copy(
                update={
                    "average_rating": mean_rating([item.rating for item in ratings]),
                    "updated_at": now,
                }
            )
            return rating.model_copy()

    def get_teacher_ratings(self, teacher_id: str) -> list[Rating]:
        with self._lock:
            return [rating.model_copy() for rating in self._ratings.get(teacher_id, [])]

    def calculate_average_rating(self, teacher_id: str) -> float | None:
        with self._lock:
            ratings = self._ratings.get(teacher_id, [])
            return mean_rating([rating.rating for rating in ratings])

    # -- users --------------------------------------------------------------

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._lock:
            for user in self._users.values():
                if user.username == username:
                    return user.model_copy()
        return None

    def create_user(self, payload: UserCreate) -> User:
        with self._lock:
            if any(user.username == payload.username for user in self._users.values()):
                raise UsernameTakenError(payload.username)
            user = User(
                id=next(self._user_ids),
                username=payload.username,
                password=hash_password(payload.password),
            )
            self._users[user.id] = user
            return user.model_copy()


__all__ = ["InMemoryTeacherStore"]
