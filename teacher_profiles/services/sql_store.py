"""SQLAlchemy-backed teacher store."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from pydantic import BaseModel
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ..db import SessionLocal, get_session
from ..db.models import RatingRow, TeacherRow, UserRow
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
from .search import filter_teachers, paginate
from .store import Clock, hash_password, new_teacher_id, utcnow

LOGGER = logging.getLogger(__name__)


def _aware(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back; stored values are always UTC.
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _to_teacher(row: TeacherRow) -> Teacher:
    teacher = Teacher.model_validate(row)
    return teacher.model_copy(
        update={
            "created_at": _aware(row.created_at),
            "updated_at": _aware(row.updated_at),
        }
    )


def _to_rating(row: RatingRow) -> Rating:
    rating = Rating.model_validate(row)
    return rating.model_copy(update={"created_at": _aware(row.created_at)})


class SqlTeacherStore:
    """Teacher store persisting to any database SQLAlchemy can reach.

    Each operation runs in its own session and commits on success.
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session] | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._factory = session_factory or SessionLocal
        self._clock = clock or utcnow

    def _session(self):
        return get_session(self._factory)

    # -- teachers -----------------------------------------------------------

    def get_teacher(self, teacher_id: str) -> Teacher | None:
        with self._session() as session:
            row = session.get(TeacherRow, teacher_id)
            return _to_teacher(row) if row else None

    def get_all_teachers(self) -> list[Teacher]:
        with self._session() as session:
            rows = session.scalars(
                select(TeacherRow).order_by(TeacherRow.created_at.desc())
            ).all()
            return [_to_teacher(row) for row in rows]

    def create_teacher(self, payload: TeacherCreate) -> Teacher:
        now = self._clock()
        data = payload.model_dump()
        row = TeacherRow(
            id=new_teacher_id(),
            total_sessions=0,
            average_rating=None,
            created_at=now,
            updated_at=now,
            **data,
        )
        with self._session() as session:
            session.add(row)
            session.flush()
            teacher = _to_teacher(row)
        LOGGER.info("Created teacher %s (%s)", teacher.id, teacher.name)
        return teacher

    def update_teacher(self, teacher_id: str, changes: TeacherUpdate) -> Teacher | None:
        with self._session() as session:
            row = session.get(TeacherRow, teacher_id)
            if row is None:
                return None
            for field, value in changes.changes().items():
                if isinstance(value, BaseModel):
                    value = value.model_dump()
                setattr(row, field, value)
            row.updated_at = self._clock()
            session.flush()
            return _to_teacher(row)

    def delete_teacher(self, teacher_id: str) -> bool:
        with self._session() as session:
            row = session.get(TeacherRow, teacher_id)
            if row is None:
                return False
            session.delete(row)
        LOGGER.info("Deleted teacher %s", teacher_id)
        return True

    def search_teachers(self, filters: SearchFilters) -> SearchResult:
        with self._session() as session:
            rows = session.scalars(
                select(TeacherRow).order_by(TeacherRow.created_at.asc())
            ).all()
            candidates = [_to_teacher(row) for row in rows]
        matches = filter_teachers(candidates, filters)
        page, pagination = paginate(matches, filters.page, filters.limit)
        return SearchResult(teachers=page, pagination=pagination)

    def get_teachers_by_domain(self, domain: str) -> list[Teacher]:
        wanted = domain.lower()
        return [
            teacher
            for teacher in self.get_all_teachers()
            if teacher.specialization.primary_domain.lower() == wanted
        ]

    def increment_session(self, teacher_id: str) -> bool:
        with self._session() as session:
            result = session.execute(
                update(TeacherRow)
                .where(TeacherRow.id == teacher_id)
                .values(
                    total_sessions=TeacherRow.total_sessions + 1,
                    updated_at=self._clock(),
                )
            )
            return result.rowcount == 1

    # -- ratings ------------------------------------------------------------

    def add_rating(self, teacher_id: str, score: float) -> Rating | None:
        with self._session() as session:
            teacher = session.get(TeacherRow, teacher_id)
            if teacher is None:
                return None
            now = self._clock()
            row = RatingRow(teacher_id=teacher_id, rating=score, created_at=now)
            session.add(row)
            session.flush()
            teacher.average_rating = self._average(session, teacher_id)
            teacher.updated_at = now
            return _to_rating(row)

    def get_teacher_ratings(self, teacher_id: str) -> list[Rating]:
        with self._session() as session:
            rows = session.scalars(
                select(RatingRow)
                .where(RatingRow.teacher_id == teacher_id)
                .order_by(RatingRow.id)
            ).all()
            return [_to_rating(row) for row in rows]

    def calculate_average_rating(self, teacher_id: str) -> float | None:
        with self._session() as session:
            return self._average(session, teacher_id)

    @staticmethod
    def _average(session: Session, teacher_id: str) -> float | None:
        value = session.scalar(
            select(func.avg(RatingRow.rating)).where(RatingRow.teacher_id == teacher_id)
        )
        return float(value) if value is not None else None

    # -- users --------------------------------------------------------------

    def get_user(self, user_id: int) -> User | None:
        with self._session() as session:
            row = session.get(UserRow, user_id)
            return User.model_validate(row) if row else None

    def get_user_by_username(self, username: str) -> User | None:
        with self._session() as session:
            row = session.scalar(select(UserRow).where(UserRow.username == username))
            return User.model_validate(row) if row else None

    def create_user(self, payload: UserCreate) -> User:
        try:
            with self._session() as session:
                existing = session.scalar(
                    select(UserRow.id).where(UserRow.username == payload.username)
                )
                if existing is not None:
                    raise UsernameTakenError(payload.username)
                row = UserRow(
                    username=payload.username,
                    password=hash_password(payload.password),
                )
                session.add(row)
                session.flush()
                return User.model_validate(row)
        except IntegrityError as exc:
            raise UsernameTakenError(payload.username) from exc


__all__ = ["SqlTeacherStore"]
