"""Teacher profile model."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teacher_profiles.db import Base


class TeacherRow(Base):
    """An AI tutor profile; nested settings are stored as JSON documents."""

    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    personality: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    specialization: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    adaptation: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    system_prompt_template: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    total_sessions: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    average_rating: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    ratings: Mapped[list["RatingRow"]] = relationship(
        "RatingRow",
        back_populates="teacher",
        cascade="all, delete-orphan",
        order_by="RatingRow.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - repr not critical
        return f"TeacherRow(id={self.id!r}, name={self.name!r})"
