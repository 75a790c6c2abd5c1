"""Convenient re-exports for the teacher store service layer."""
from __future__ import annotations

from .defaults import create_default_teachers, default_teacher_payloads, styles_catalogue
from .memory_store import InMemoryTeacherStore
from .prompts import default_template, render_system_prompt
from .search import filter_teachers, matches_filters, mean_rating, paginate
from .sql_store import SqlTeacherStore
from .store import TeacherStore

__all__ = [
    "InMemoryTeacherStore",
    "SqlTeacherStore",
    "TeacherStore",
    "create_default_teachers",
    "default_teacher_payloads",
    "default_template",
    "filter_teachers",
    "matches_filters",
    "mean_rating",
    "paginate",
    "render_system_prompt",
    "styles_catalogue",
]
