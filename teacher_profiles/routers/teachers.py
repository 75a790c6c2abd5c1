"""Teacher profile endpoints backed by the injected teacher store."""
from __future__ import annotations

import contextlib
import logging
from typing import Annotated, Any, Callable, Coroutine, Iterator, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute

from ..dependencies import get_store
from ..errors import ApiError, validation_details
from ..schemas import (
    DefaultTeachersResponse,
    ErrorResponse,
    MessageResponse,
    PromptResponse,
    RatingCreate,
    SearchFilters,
    SearchResult,
    StylesResponse,
    Teacher,
    TeacherCreate,
    TeacherRatings,
    TeacherUpdate,
)
from ..services import (
    TeacherStore,
    create_default_teachers,
    render_system_prompt,
    styles_catalogue,
)

LOGGER = logging.getLogger(__name__)

TEACHER_NOT_FOUND = "Teacher not found"

# Error message for an invalid request body, keyed by endpoint name.
INVALID_BODY_MESSAGES = {
    "create_teacher": "Invalid teacher data",
    "update_teacher": "Invalid teacher data",
    "add_rating": "Invalid rating data",
}


class TeacherRoute(APIRoute):
    """Route that reports an invalid body with its endpoint's error message."""

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        message = INVALID_BODY_MESSAGES.get(self.name)
        if message is None:
            return handler

        async def route_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except RequestValidationError as exc:
                raise ApiError(
                    status.HTTP_400_BAD_REQUEST,
                    message,
                    details=validation_details(exc.errors()),
                ) from exc

        return route_handler


router = APIRouter(
    prefix="/enhanced-teacher",
    tags=["enhanced-teacher"],
    route_class=TeacherRoute,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)


@contextlib.contextmanager
def _failure(message: str) -> Iterator[None]:
    """Turn unexpected errors into a generic 500 response."""
    try:
        yield
    except ApiError:
        raise
    except Exception as exc:  # noqa: BLE001 - never leak internals to clients
        LOGGER.exception(message)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message) from exc


def _not_found(teacher_id: str) -> ApiError:
    LOGGER.warning("Teacher %s not found", teacher_id)
    return ApiError(status.HTTP_404_NOT_FOUND, TEACHER_NOT_FOUND)


# ---------------------------------------------------------------------------
# Collection and static routes (registered before /{teacher_id})
# ---------------------------------------------------------------------------


@router.get("", response_model=List[Teacher])
def list_teachers(store: TeacherStore = Depends(get_store)) -> list[Teacher]:
    with _failure("Failed to fetch teachers"):
        return store.get_all_teachers()


@router.post("", response_model=Teacher, status_code=status.HTTP_201_CREATED)
def create_teacher(
    payload: TeacherCreate,
    store: TeacherStore = Depends(get_store),
) -> Teacher:
    with _failure("Failed to create teacher"):
        return store.create_teacher(payload)


@router.get("/search", response_model=SearchResult)
def search_teachers(
    domain: Annotated[Optional[str], Query()] = None,
    teaching_style: Annotated[Optional[str], Query()] = None,
    difficulty_level: Annotated[Optional[str], Query()] = None,
    traits: Annotated[Optional[List[str]], Query()] = None,
    query: Annotated[Optional[str], Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1)] = 10,
    store: TeacherStore = Depends(get_store),
) -> SearchResult:
    """Paginated search over the conjunction of the supplied filters.

    A ``page`` or ``limit`` that is not a positive integer is rejected with 400
    rather than silently replaced by its default.
    """
    filters = SearchFilters(
        domain=domain,
        teaching_style=teaching_style,
        difficulty_level=difficulty_level,
        traits=traits or [],
        query=query,
        page=page,
        limit=limit,
    )
    with _failure("Failed to search teachers"):
        return store.search_teachers(filters)


@router.get("/styles/all", response_model=StylesResponse)
def list_styles() -> StylesResponse:
    with _failure("Failed to fetch styles"):
        return styles_catalogue()


@router.post("/create-defaults", response_model=DefaultTeachersResponse)
def create_defaults(store: TeacherStore = Depends(get_store)) -> DefaultTeachersResponse:
    with _failure("Failed to create default teachers"):
        teachers = create_default_teachers(store)
    return DefaultTeachersResponse(
        message="Default teachers created",
        teachers=teachers,
        count=len(teachers),
    )


@router.get("/domain/{domain}", response_model=Union[Teacher, List[Teacher]])
def get_teacher_by_domain(
    domain: str,
    return_all: Annotated[bool, Query(alias="all")] = False,
    store: TeacherStore = Depends(get_store),
) -> Union[Teacher, list[Teacher]]:
    """First teacher whose primary domain equals ``domain``; ``?all=true`` lists every match."""
    with _failure("Failed to fetch teachers by domain"):
        teachers = store.get_teachers_by_domain(domain)
    if not teachers:
        raise ApiError(status.HTTP_404_NOT_FOUND, "No teachers found for this domain")
    return teachers if return_all else teachers[0]


# ---------------------------------------------------------------------------
# Single-teacher routes
# ---------------------------------------------------------------------------


@router.get("/{teacher_id}", response_model=Teacher)
def get_teacher(teacher_id: str, store: TeacherStore = Depends(get_store)) -> Teacher:
    with _failure("Failed to fetch teacher"):
        teacher = store.get_teacher(teacher_id)
    if teacher is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, TEACHER_NOT_FOUND)
    return teacher


@router.put("/{teacher_id}", response_model=Teacher)
def update_teacher(
    teacher_id: str,
    payload: TeacherUpdate,
    store: TeacherStore = Depends(get_store),
) -> Teacher:
    with _failure("Failed to update teacher"):
        teacher = store.update_teacher(teacher_id, payload)
    if teacher is None:
        raise _not_found(teacher_id)
    return teacher


@router.delete("/{teacher_id}", response_model=MessageResponse)
def delete_teacher(teacher_id: str, store: TeacherStore = Depends(get_store)) -> MessageResponse:
    with _failure("Failed to delete teacher"):
        deleted = store.delete_teacher(teacher_id)
    if not deleted:
        raise _not_found(teacher_id)
    return MessageResponse(message=f"Enhanced teacher {teacher_id} deleted successfully")


@router.post("/{teacher_id}/rating", response_model=MessageResponse)
def add_rating(
    teacher_id: str,
    payload: RatingCreate,
    store: TeacherStore = Depends(get_store),
) -> MessageResponse:
    with _failure("Failed to add rating"):
        rating = store.add_rating(teacher_id, payload.rating)
    if rating is None:
        raise _not_found(teacher_id)
    return MessageResponse(message=f"Rating added successfully for teacher {teacher_id}")


@router.get("/{teacher_id}/ratings", response_model=TeacherRatings)
def list_ratings(teacher_id: str, store: TeacherStore = Depends(get_store)) -> TeacherRatings:
    with _failure("Failed to fetch ratings"):
        if store.get_teacher(teacher_id) is None:
            raise ApiError(status.HTTP_404_NOT_FOUND, TEACHER_NOT_FOUND)
        ratings = store.get_teacher_ratings(teacher_id)
        average = store.calculate_average_rating(teacher_id)
    return TeacherRatings(teacher_id=teacher_id, ratings=ratings, average_rating=average)


@router.post("/{teacher_id}/increment-session", response_model=MessageResponse)
def increment_session(
    teacher_id: str, store: TeacherStore = Depends(get_store)
) -> MessageResponse:
    with _failure("Failed to increment session count"):
        incremented = store.increment_session(teacher_id)
    if not incremented:
        raise _not_found(teacher_id)
    return MessageResponse(message=f"Session count incremented for teacher {teacher_id}")


@router.post("/{teacher_id}/generate-prompt", response_model=PromptResponse)
def generate_prompt(teacher_id: str, store: TeacherStore = Depends(get_store)) -> PromptResponse:
    """Render the system prompt; any request body (such as ``context``) is ignored."""
    with _failure("Failed to generate system prompt"):
        teacher = store.get_teacher(teacher_id)
        if teacher is None:
            raise ApiError(status.HTTP_404_NOT_FOUND, TEACHER_NOT_FOUND)
        system_prompt = render_system_prompt(teacher)
    return PromptResponse(teacher_id=teacher.id, name=teacher.name, system_prompt=system_prompt)
