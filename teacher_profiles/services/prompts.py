"""System prompt rendering for teacher profiles."""
from __future__ import annotations

from ..schemas import Teacher

PLACEHOLDERS = ("{teacher_name}", "{title}", "{domain}")


def default_template(teacher: Teacher) -> str:
    """Describe the teacher from its personality and specialization."""
    traits = ", ".join(teacher.personality.primary_traits)
    return (
        f"You are {teacher.name}, {teacher.title}.\n\n"
        f"You have these personality traits: {traits}.\n"
        f"Your teaching style is {teacher.personality.teaching_style}.\n"
        f"You specialize in {teacher.specialization.primary_domain}."
    )


def render_system_prompt(teacher: Teacher) -> str:
    """Fill ``{teacher_name}``, ``{title}`` and ``{domain}`` in the teacher's template.

    Falls back to :func:`default_template` when the teacher has no template of
    its own. Any other braces are left untouched.
    """
    template = teacher.system_prompt_template or default_template(teacher)
    values = dict(
        zip(
            PLACEHOLDERS,
            (teacher.name, teacher.title, teacher.specialization.primary_domain),
        )
    )
    for placeholder, value in values.items():
        template = template.replace(placeholder, value)
    return template


__all__ = ["default_template", "render_system_prompt"]
