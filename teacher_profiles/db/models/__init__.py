"""SQLAlchemy model package."""
from teacher_profiles.db.models.rating import RatingRow
from teacher_profiles.db.models.teacher import TeacherRow
from teacher_profiles.db.models.user import UserRow

__all__ = [
    "RatingRow",
    "TeacherRow",
    "UserRow",
]
