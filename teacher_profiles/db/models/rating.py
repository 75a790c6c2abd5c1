"""Rating model."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from teacher_profiles.db import Base


class RatingRow(Base):
    """A single feedback score left for a teacher."""

    __tablename__ = "ratings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    teacher_id: Mapped[str] = mapped_column(
        ForeignKey("teachers.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    teacher: Mapped["TeacherRow"] = relationship("TeacherRow", back_populates="ratings")

    def __repr__(self) -> str:  # pragma: no cover
        return f"RatingRow(id={self.id!r}, teacher_id={self.teacher_id!r})"
