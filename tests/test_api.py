"""End-to-end HTTP tests through the FastAPI test client."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from teacher_profiles.app import create_app
from teacher_profiles.services import InMemoryTeacherStore, SqlTeacherStore
from teacher_profiles.db import create_session_factory
from teacher_profiles.dependencies import build_store


@pytest.fixture()
def client(clock) -> TestClient:
    app = create_app(InMemoryTeacherStore(clock=clock), api_prefix="", seed_defaults=False)
    with TestClient(app) as test_client:
        yield test_client


def _teacher_body(name: str = "Dr. Test", domain: str = "Mathematics") -> dict:
    return {
        "name": name,
        "title": "Professor",
        "personality": {"primary_traits": ["patient"], "teaching_style": "socratic"},
        "specialization": {"primary_domain": domain},
    }


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_create_then_search_scenario(client) -> None:
    created = client.post("/enhanced-teacher", json=_teacher_body())
    assert created.status_code == 201
    teacher = created.json()
    assert teacher["id"]
    assert teacher["total_sessions"] == 0
    assert teacher["average_rating"] is None
    assert teacher["adaptation"] == {
        "adapts_to_learning_style": False,
        "pace_adjustment": False,
        "difficulty_scaling": False,
        "remembers_context": False,
        "tracks_progress": False,
    }

    response = client.get(
        "/enhanced-teacher/search", params={"domain": "math", "page": 1, "limit": 10}
    )
    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body["teachers"]] == ["Dr. Test"]
    assert body["pagination"] == {"total": 1, "page": 1, "limit": 10, "total_pages": 1}


def test_search_accepts_repeated_traits(client) -> None:
    client.post("/enhanced-teacher", json=_teacher_body("Patient Pat"))
    client.post("/enhanced-teacher", json=_teacher_body("Other", domain="Art"))

    response = client.get(
        "/enhanced-teacher/search", params=[("traits", "humorous"), ("traits", "patient")]
    )

    assert response.json()["pagination"]["total"] == 2


def test_invalid_body_returns_400_with_details(client) -> None:
    response = client.post("/enhanced-teacher", json={"title": "Professor"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Invalid teacher data"
    assert {tuple(item["loc"]) for item in body["details"]} >= {("name",), ("specialization",)}


def test_missing_body_returns_400(client) -> None:
    response = client.post("/enhanced-teacher")

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid teacher data"


def test_update_rejects_null_name(client) -> None:
    teacher_id = client.post("/enhanced-teacher", json=_teacher_body()).json()["id"]

    response = client.put(f"/enhanced-teacher/{teacher_id}", json={"name": None})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid teacher data"
    assert client.get(f"/enhanced-teacher/{teacher_id}").json()["name"] == "Dr. Test"


@pytest.mark.parametrize("value", ["excellent", "4", True, None])
def test_rating_must_be_a_json_number(client, value) -> None:
    teacher_id = client.post("/enhanced-teacher", json=_teacher_body()).json()["id"]

    response = client.post(f"/enhanced-teacher/{teacher_id}/rating", json={"rating": value})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid rating data"
    assert response.json()["details"][0]["loc"] == ["rating"]
    ratings = client.get(f"/enhanced-teacher/{teacher_id}/ratings").json()
    assert ratings["ratings"] == []
    assert ratings["average_rating"] is None


def test_generate_prompt_ignores_context(client) -> None:
    teacher_id = client.post("/enhanced-teacher", json=_teacher_body()).json()["id"]

    for body in ({"context": "x"}, {"context": {"topic": "limits"}}, ["anything"]):
        response = client.post(f"/enhanced-teacher/{teacher_id}/generate-prompt", json=body)
        assert response.status_code == 200
        assert response.json()["name"] == "Dr. Test"


def test_openapi_documents_request_bodies(client) -> None:
    paths = client.get("/openapi.json").json()["paths"]

    create_body = paths["/enhanced-teacher"]["post"]["requestBody"]
    rating_body = paths["/enhanced-teacher/{teacher_id}/rating"]["post"]["requestBody"]

    assert "TeacherCreate" in create_body["content"]["application/json"]["schema"]["$ref"]
    assert "RatingCreate" in rating_body["content"]["application/json"]["schema"]["$ref"]


def test_unhandled_errors_return_json_500(clock) -> None:
    class MalformedStore(InMemoryTeacherStore):
        def get_teacher(self, teacher_id):
            return {"id": teacher_id}

    app = create_app(MalformedStore(clock=clock), api_prefix="", seed_defaults=False)

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/enhanced-teacher/abc")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


def test_invalid_query_returns_400(client) -> None:
    response = client.get("/enhanced-teacher/search", params={"page": 0})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request data"
    assert response.json()["details"]


def test_crud_round_trip(client) -> None:
    teacher_id = client.post("/enhanced-teacher", json=_teacher_body()).json()["id"]

    updated = client.put(
        f"/enhanced-teacher/{teacher_id}",
        json={"title": "Dean", "personality": {"humor_usage": "frequent"}},
    )
    assert updated.status_code == 200
    assert updated.json()["title"] == "Dean"
    assert updated.json()["personality"]["humor_usage"] == "frequent"
    assert updated.json()["personality"]["primary_traits"] == []

    deleted = client.delete(f"/enhanced-teacher/{teacher_id}")
    assert deleted.json() == {"message": f"Enhanced teacher {teacher_id} deleted successfully"}

    missing = client.get(f"/enhanced-teacher/{teacher_id}")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Teacher not found"}
    assert client.get(f"/enhanced-teacher/{teacher_id}/ratings").status_code == 404


def test_ratings_sessions_and_prompt(client) -> None:
    teacher_id = client.post("/enhanced-teacher", json=_teacher_body()).json()["id"]

    for score in (4, 5, 3):
        assert client.post(f"/enhanced-teacher/{teacher_id}/rating", json={"rating": score}).status_code == 200
    client.post(f"/enhanced-teacher/{teacher_id}/increment-session")

    teacher = client.get(f"/enhanced-teacher/{teacher_id}").json()
    assert teacher["average_rating"] == pytest.approx(4.0)
    assert teacher["total_sessions"] == 1

    ratings = client.get(f"/enhanced-teacher/{teacher_id}/ratings").json()
    assert [item["rating"] for item in ratings["ratings"]] == [4, 5, 3]

    prompt = client.post(f"/enhanced-teacher/{teacher_id}/generate-prompt").json()
    assert prompt["system_prompt"] == (
        "You are Dr. Test, Professor.\n\n"
        "You have these personality traits: patient.\n"
        "Your teaching style is socratic.\n"
        "You specialize in Mathematics."
    )


def test_rating_for_unknown_teacher_is_404(client) -> None:
    response = client.post("/enhanced-teacher/unknown/rating", json={"rating": 5})

    assert response.status_code == 404


def test_static_routes_are_not_treated_as_ids(client) -> None:
    styles = client.get("/enhanced-teacher/styles/all")
    assert styles.status_code == 200
    assert {"teaching_styles", "personality_traits", "difficulty_levels"} <= styles.json().keys()

    defaults = client.post("/enhanced-teacher/create-defaults")
    assert defaults.json()["count"] == 2

    domain = client.get("/enhanced-teacher/domain/programming")
    assert domain.json()["name"] == "Alex Rivera"

    listing = client.get("/enhanced-teacher/domain/mathematics", params={"all": "true"})
    assert [item["name"] for item in listing.json()] == ["Dr. Elizabeth Chen"]


def test_api_prefix_and_sql_backend(clock, sql_engine) -> None:
    store = SqlTeacherStore(create_session_factory(sql_engine), clock=clock)
    app = create_app(store, api_prefix="/api/v1", seed_defaults=True)

    with TestClient(app) as client:
        response = client.get("/api/v1/enhanced-teacher")

    assert response.status_code == 200
    assert {item["name"] for item in response.json()} == {"Dr. Elizabeth Chen", "Alex Rivera"}


def test_build_store_selects_backend() -> None:
    assert isinstance(build_store("memory"), InMemoryTeacherStore)

    with pytest.raises(ValueError):
        build_store("redis")
