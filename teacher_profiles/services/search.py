"""Filtering, pagination and rating helpers shared by every teacher store."""
from __future__ import annotations

import math
from typing import Iterable, Sequence, TypeVar

from ..schemas import Pagination, SearchFilters, Teacher

T = TypeVar("T")


def matches_filters(teacher: Teacher, filters: SearchFilters) -> bool:
    """Return True when ``teacher`` satisfies every supplied filter.

    Empty filters are ignored. ``traits`` matches when the teacher carries at
    least one of the requested traits; every other filter must hold.
    """
    domain = teacher.specialization.primary_domain.lower()

    if filters.domain and filters.domain.lower() not in domain:
        return False

    if filters.teaching_style and teacher.personality.teaching_style != filters.teaching_style:
        return False

    if filters.difficulty_level and filters.difficulty_level not in (
        teacher.specialization.min_difficulty,
        teacher.specialization.max_difficulty,
    ):
        return False

    if filters.traits and not any(
        trait in teacher.personality.primary_traits for trait in filters.traits
    ):
        return False

    if filters.query:
        query = filters.query.lower()
        if not (
            query in teacher.name.lower()
            or query in teacher.title.lower()
            or query in domain
        ):
            return False

    return True


def filter_teachers(teachers: Iterable[Teacher], filters: SearchFilters) -> list[Teacher]:
    return [teacher for teacher in teachers if matches_filters(teacher, filters)]


def paginate(items: Sequence[T], page: int, limit: int) -> tuple[list[T], Pagination]:
    """Slice ``items`` for a 1-based ``page`` of ``limit`` entries."""
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    total = len(items)
    offset = (page - 1) * limit
    pagination = Pagination(
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
    )
    return list(items[offset : offset + limit]), pagination


def mean_rating(scores: Sequence[float]) -> float | None:
    """Arithmetic mean of ``scores``; ``None`` when there are none."""
    if not scores:
        return None
    return sum(scores) / len(scores)


__all__ = ["filter_teachers", "matches_filters", "mean_rating", "paginate"]
