"""Route handlers exercised directly against an in-memory store."""
from __future__ import annotations

import pytest

from teacher_profiles.errors import ApiError
from teacher_profiles.routers import teachers as routes
from teacher_profiles.schemas import RatingCreate, TeacherCreate, TeacherUpdate
from teacher_profiles.services import InMemoryTeacherStore


class ExplodingStore(InMemoryTeacherStore):
    """Store double whose reads fail unexpectedly."""

    def get_all_teachers(self):
        raise RuntimeError("connection reset by peer")

    def search_teachers(self, filters):
        raise RuntimeError("boom")


@pytest.fixture()
def memory_store(clock) -> InMemoryTeacherStore:
    return InMemoryTeacherStore(clock=clock)


def _payload(**overrides) -> TeacherCreate:
    data = {
        "name": "Dr. Test",
        "title": "Professor",
        "specialization": {"primary_domain": "Mathematics"},
    }
    data.update(overrides)
    return TeacherCreate.model_validate(data)


def test_create_and_fetch_teacher(memory_store) -> None:
    created = routes.create_teacher(_payload(), store=memory_store)

    fetched = routes.get_teacher(created.id, store=memory_store)

    assert fetched == created
    assert routes.list_teachers(store=memory_store) == [created]


def test_missing_teacher_maps_to_404(memory_store) -> None:
    for call in (
        lambda: routes.get_teacher("nope", store=memory_store),
        lambda: routes.update_teacher("nope", TeacherUpdate(name="X"), store=memory_store),
        lambda: routes.delete_teacher("nope", store=memory_store),
        lambda: routes.increment_session("nope", store=memory_store),
        lambda: routes.add_rating("nope", RatingCreate(rating=4), store=memory_store),
        lambda: routes.list_ratings("nope", store=memory_store),
        lambda: routes.generate_prompt("nope", store=memory_store),
    ):
        with pytest.raises(ApiError) as exc_info:
            call()
        assert exc_info.value.status_code == 404
        assert exc_info.value.error == "Teacher not found"


def test_update_applies_only_supplied_fields(memory_store) -> None:
    created = routes.create_teacher(_payload(), store=memory_store)

    updated = routes.update_teacher(
        created.id, TeacherUpdate.model_validate({"title": "Dean"}), store=memory_store
    )

    assert updated.title == "Dean"
    assert updated.name == "Dr. Test"


def test_rating_and_session_messages(memory_store) -> None:
    created = routes.create_teacher(_payload(), store=memory_store)

    rated = routes.add_rating(created.id, RatingCreate(rating=4.5), store=memory_store)
    bumped = routes.increment_session(created.id, store=memory_store)
    ratings = routes.list_ratings(created.id, store=memory_store)

    assert rated.message == f"Rating added successfully for teacher {created.id}"
    assert bumped.message == f"Session count incremented for teacher {created.id}"
    assert ratings.average_rating == pytest.approx(4.5)
    assert [item.rating for item in ratings.ratings] == [4.5]


def test_delete_message(memory_store) -> None:
    created = routes.create_teacher(_payload(), store=memory_store)

    response = routes.delete_teacher(created.id, store=memory_store)

    assert response.message == f"Enhanced teacher {created.id} deleted successfully"


def test_domain_lookup_returns_first_match_or_all(memory_store) -> None:
    first = routes.create_teacher(_payload(name="First"), store=memory_store)
    routes.create_teacher(_payload(name="Second"), store=memory_store)

    single = routes.get_teacher_by_domain("mathematics", store=memory_store)
    every = routes.get_teacher_by_domain("mathematics", return_all=True, store=memory_store)

    assert single.id == first.id
    assert {teacher.name for teacher in every} == {"First", "Second"}

    with pytest.raises(ApiError) as exc_info:
        routes.get_teacher_by_domain("Biology", store=memory_store)
    assert exc_info.value.error == "No teachers found for this domain"


def test_search_defaults(memory_store) -> None:
    routes.create_teacher(_payload(), store=memory_store)

    result = routes.search_teachers(domain="MATH", store=memory_store)

    assert result.pagination.page == 1
    assert result.pagination.limit == 10
    assert [teacher.name for teacher in result.teachers] == ["Dr. Test"]


def test_generate_prompt_uses_template(memory_store) -> None:
    created = routes.create_teacher(
        _payload(system_prompt_template="I am {teacher_name} teaching {domain}."),
        store=memory_store,
    )

    response = routes.generate_prompt(created.id, store=memory_store)

    assert response.teacher_id == created.id
    assert response.name == "Dr. Test"
    assert response.system_prompt == "I am Dr. Test teaching Mathematics."


def test_create_defaults_and_styles(memory_store) -> None:
    response = routes.create_defaults(store=memory_store)

    assert response.count == 2
    assert response.message == "Default teachers created"
    assert {teacher.name for teacher in response.teachers} == {"Dr. Elizabeth Chen", "Alex Rivera"}
    assert len(routes.list_teachers(store=memory_store)) == 2

    styles = routes.list_styles()
    assert [option.value for option in styles.teaching_styles] == [
        "socratic",
        "explanatory",
        "practical",
        "theoretical",
        "adaptive",
    ]
    assert len(styles.personality_traits) == 8
    assert styles.difficulty_levels[-1].label == "Expert"


def test_unexpected_errors_become_generic_500(clock, caplog) -> None:
    store = ExplodingStore(clock=clock)

    with pytest.raises(ApiError) as exc_info:
        routes.list_teachers(store=store)

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == "Failed to fetch teachers"
    assert "connection reset" not in exc_info.value.to_body()["error"]
    assert "Failed to fetch teachers" in caplog.text

    with pytest.raises(ApiError) as exc_info:
        routes.search_teachers(store=store)
    assert exc_info.value.error == "Failed to search teachers"


def test_styles_failure_becomes_generic_500(monkeypatch) -> None:
    def broken_catalogue():
        raise KeyError("teaching_styles")

    monkeypatch.setattr(routes, "styles_catalogue", broken_catalogue)

    with pytest.raises(ApiError) as exc_info:
        routes.list_styles()

    assert exc_info.value.status_code == 500
    assert exc_info.value.error == "Failed to fetch styles"
