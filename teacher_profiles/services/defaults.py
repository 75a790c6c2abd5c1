"""Sample teachers and the static style catalogue."""
from __future__ import annotations

import logging
from copy import deepcopy
from typing import Any

from ..schemas import StyleOption, StylesResponse, Teacher, TeacherCreate
from .store import TeacherStore

LOGGER = logging.getLogger(__name__)

_FULL_ADAPTATION: dict[str, bool] = {
    "adapts_to_learning_style": True,
    "pace_adjustment": True,
    "difficulty_scaling": True,
    "remembers_context": True,
    "tracks_progress": True,
}

_DEFAULT_TEACHERS: list[dict[str, Any]] = [
    {
        "name": "Dr. Elizabeth Chen",
        "title": "Professor",
        "avatar_url": (
            "https://images.unsplash.com/photo-1559839734-2b71ea197ec2"
            "?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=400"
        ),
        "personality": {
            "primary_traits": ["analytical", "encouraging", "patient"],
            "teaching_style": "socratic",
            "formality_level": "casual",
            "question_frequency": "high",
            "encouragement_level": "high",
            "response_length": "moderate",
            "use_examples": True,
            "use_analogies": True,
            "patience_level": "high",
            "humor_usage": "moderate",
            "signature_phrases": [
                "Let's think about this step by step",
                "Great question!",
                "What do you think might happen if...?",
            ],
            "empathy_level": "high",
        },
        "specialization": {
            "primary_domain": "Mathematics",
            "specializations": ["Calculus", "Linear Algebra", "Statistics"],
            "min_difficulty": "beginner",
            "max_difficulty": "expert",
            "can_create_exercises": True,
            "can_grade_work": True,
            "can_create_curriculum": True,
            "external_resources": ["Khan Academy", "Wolfram Alpha", "MIT OpenCourseWare"],
        },
        "adaptation": _FULL_ADAPTATION,
    },
    {
        "name": "Alex Rivera",
        "title": "Senior Developer",
        "avatar_url": (
            "https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d"
            "?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=400"
        ),
        "personality": {
            "primary_traits": ["practical", "creative", "humorous"],
            "teaching_style": "practical",
            "formality_level": "casual",
            "question_frequency": "moderate",
            "encouragement_level": "high",
            "response_length": "moderate",
            "use_examples": True,
            "use_analogies": True,
            "patience_level": "high",
            "humor_usage": "frequent",
            "signature_phrases": [
                "Let's code this up!",
                "Here's a neat trick",
                "Don't worry, we've all been there",
            ],
            "empathy_level": "high",
        },
        "specialization": {
            "primary_domain": "Programming",
            "specializations": ["JavaScript", "React", "Node.js", "Python"],
            "min_difficulty": "beginner",
            "max_difficulty": "advanced",
            "can_create_exercises": True,
            "can_grade_work": True,
            "can_create_curriculum": True,
            "external_resources": ["MDN Web Docs", "freeCodeCamp", "Stack Overflow"],
        },
        "adaptation": _FULL_ADAPTATION,
    },
]

_STYLE_CATALOGUE: dict[str, list[tuple[str, str]]] = {
    "teaching_styles": [
        ("socratic", "Socratic"),
        ("explanatory", "Explanatory"),
        ("practical", "Practical"),
        ("theoretical", "Theoretical"),
        ("adaptive", "Adaptive"),
    ],
    "personality_traits": [
        ("encouraging", "Encouraging"),
        ("patient", "Patient"),
        ("challenging", "Challenging"),
        ("humorous", "Humorous"),
        ("formal", "Formal"),
        ("casual", "Casual"),
        ("analytical", "Analytical"),
        ("creative", "Creative"),
    ],
    "difficulty_levels": [
        ("beginner", "Beginner"),
        ("intermediate", "Intermediate"),
        ("advanced", "Advanced"),
        ("expert", "Expert"),
    ],
}


def default_teacher_payloads() -> list[TeacherCreate]:
    return [TeacherCreate.model_validate(deepcopy(item)) for item in _DEFAULT_TEACHERS]


def create_default_teachers(store: TeacherStore) -> list[Teacher]:
    """Insert the sample teachers through the regular create path."""
    created = [store.create_teacher(payload) for payload in default_teacher_payloads()]
    LOGGER.info("Created %d default teachers", len(created))
    return created


def styles_catalogue() -> StylesResponse:
    return StylesResponse(
        **{
            group: [StyleOption(value=value, label=label) for value, label in options]
            for group, options in _STYLE_CATALOGUE.items()
        }
    )


__all__ = ["create_default_teachers", "default_teacher_payloads", "styles_catalogue"]
