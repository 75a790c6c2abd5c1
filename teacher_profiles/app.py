"""FastAPI application exposing the teacher profile endpoints."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import API_PREFIX, CORS_ALLOW_ORIGINS, LOG_LEVEL, SEED_DEFAULT_TEACHERS
from .dependencies import build_store
from .errors import ApiError, validation_details
from .routers import teachers as teachers_router
from .services import TeacherStore, create_default_teachers

LOGGER = logging.getLogger(__name__)
logging.basicConfig(level=LOG_LEVEL)


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    LOGGER.info("Rejected %s %s: invalid request data", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request data", "details": validation_details(exc.errors())},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    LOGGER.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def create_app(
    store: TeacherStore | None = None,
    *,
    api_prefix: str = API_PREFIX,
    seed_defaults: bool = SEED_DEFAULT_TEACHERS,
) -> FastAPI:
    """Build the application around ``store`` (the configured backend by default)."""
    app = FastAPI(title="Teacher Profiles Service", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.state.store = store if store is not None else build_store()
    if seed_defaults and not app.state.store.get_all_teachers():
        create_default_teachers(app.state.store)

    app.include_router(teachers_router.router, prefix=api_prefix)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()
