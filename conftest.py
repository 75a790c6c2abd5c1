from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from teacher_profiles.db import create_db_engine, create_session_factory, init_db
from teacher_profiles.schemas import TeacherCreate
from teacher_profiles.services import InMemoryTeacherStore, SqlTeacherStore


class TickingClock:
    """Deterministic clock advancing one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start or datetime(2024, 9, 1, 8, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture()
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture()
def sql_engine():
    engine = create_db_engine("sqlite://", echo=False)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture(params=["memory", "sql"])
def store(request, clock):
    if request.param == "memory":
        yield InMemoryTeacherStore(clock=clock)
    else:
        engine = request.getfixturevalue("sql_engine")
        yield SqlTeacherStore(create_session_factory(engine), clock=clock)


@pytest.fixture()
def make_payload() -> Callable[..., TeacherCreate]:
    def _make(
        name: str = "Dr. Test",
        domain: str = "Mathematics",
        **overrides: Any,
    ) -> TeacherCreate:
        data: dict[str, Any] = {
            "name": name,
            "title": "Professor",
            "specialization": {"primary_domain": domain},
        }
        data.update(overrides)
        return TeacherCreate.model_validate(data)

    return _make
