"""Pydantic schemas shared across the teacher profiles service."""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Nested profile settings
# ---------------------------------------------------------------------------


class Personality(BaseModel):
    primary_traits: List[str] = Field(default_factory=list)
    teaching_style: str = "explanatory"
    formality_level: str = "casual"
    question_frequency: str = "moderate"
    encouragement_level: str = "high"
    response_length: str = "moderate"
    use_examples: bool = True
    use_analogies: bool = True
    patience_level: str = "high"
    humor_usage: str = "moderate"
    signature_phrases: List[str] = Field(default_factory=list)
    empathy_level: str = "high"


class Specialization(BaseModel):
    primary_domain: str
    specializations: List[str] = Field(default_factory=list)
    min_difficulty: str = "beginner"
    max_difficulty: str = "expert"
    can_create_exercises: bool = False
    can_grade_work: bool = False
    can_create_curriculum: bool = False
    external_resources: List[str] = Field(default_factory=list)


class Adaptation(BaseModel):
    adapts_to_learning_style: bool = False
    pace_adjustment: bool = False
    difficulty_scaling: bool = False
    remembers_context: bool = False
    tracks_progress: bool = False


# ---------------------------------------------------------------------------
# Teacher payloads
# ---------------------------------------------------------------------------


class TeacherBase(BaseModel):
    name: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    avatar_url: Optional[str] = None
    personality: Personality = Field(default_factory=Personality)
    specialization: Specialization
    adaptation: Adaptation = Field(default_factory=Adaptation)
    system_prompt_template: Optional[str] = None
    created_by: Optional[str] = None
    is_active: bool = True


class TeacherCreate(TeacherBase):
    pass


class TeacherUpdate(BaseModel):
    """Partial update; only the fields present in the payload are applied.

    Nested objects are replaced as a whole, never merged with the stored value.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    title: Optional[str] = Field(default=None, min_length=1)
    avatar_url: Optional[str] = None
    personality: Optional[Personality] = None
    specialization: Optional[Specialization] = None
    adaptation: Optional[Adaptation] = None
    system_prompt_template: Optional[str] = None
    created_by: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator(
        "name", "title", "personality", "specialization", "adaptation", "is_active"
    )
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("field may not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """Return the explicitly supplied fields, keeping nested models intact."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class Teacher(TeacherBase):
    id: str
    total_sessions: int = 0
    average_rating: Optional[float] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------------------------------------------------------------------
# Ratings
# ---------------------------------------------------------------------------


class RatingCreate(BaseModel):
    rating: float = Field(..., strict=True, allow_inf_nan=False)


class Rating(BaseModel):
    id: int
    teacher_id: str
    rating: float
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TeacherRatings(BaseModel):
    teacher_id: str
    ratings: list[Rating]
    average_rating: Optional[float] = None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


class SearchFilters(BaseModel):
    domain: Optional[str] = None
    teaching_style: Optional[str] = None
    difficulty_level: Optional[str] = None
    traits: List[str] = Field(default_factory=list)
    query: Optional[str] = None
    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


class SearchResult(BaseModel):
    teachers: list[Teacher]
    pagination: Pagination


# ---------------------------------------------------------------------------
# Route responses
# ---------------------------------------------------------------------------


class MessageResponse(BaseModel):
    message: str


class PromptResponse(BaseModel):
    teacher_id: str
    name: str
    system_prompt: str


class DefaultTeachersResponse(BaseModel):
    message: str
    teachers: list[Teacher]
    count: int


class StyleOption(BaseModel):
    value: str
    label: str


class StylesResponse(BaseModel):
    teaching_styles: list[StyleOption]
    personality_traits: list[StyleOption]
    difficulty_levels: list[StyleOption]


class ErrorResponse(BaseModel):
    error: str
    details: Optional[list[dict[str, Any]]] = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class User(BaseModel):
    id: int
    username: str
    password: str

    model_config = ConfigDict(from_attributes=True)


__all__ = [
    "Adaptation",
    "DefaultTeachersResponse",
    "ErrorResponse",
    "MessageResponse",
    "Pagination",
    "Personality",
    "PromptResponse",
    "Rating",
    "RatingCreate",
    "SearchFilters",
    "SearchResult",
    "Specialization",
    "StyleOption",
    "StylesResponse",
    "Teacher",
    "TeacherBase",
    "TeacherCreate",
    "TeacherRatings",
    "TeacherUpdate",
    "User",
    "UserCreate",
]
