"""Application configuration settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = Path(os.getenv("TEACHER_DATA_DIR", str(BASE_DIR / "data")))

# "memory" keeps everything in-process; "sql" uses DATABASE_URL.
STORE_BACKEND: Final[str] = os.getenv("TEACHER_STORE_BACKEND", "memory").strip().lower()
DATABASE_URL: Final[str] = os.getenv(
    "DATABASE_URL", f"sqlite:///{(DATA_DIR / 'teachers.db').as_posix()}"
)
SQLALCHEMY_ECHO: Final[bool] = os.getenv("SQLALCHEMY_ECHO") == "1"

# Prefix in front of the /enhanced-teacher routes, e.g. "/api/v1".
API_PREFIX: Final[str] = os.getenv("API_PREFIX", "").rstrip("/")
CORS_ALLOW_ORIGINS: Final[list[str]] = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()
SEED_DEFAULT_TEACHERS: Final[bool] = os.getenv("SEED_DEFAULT_TEACHERS") == "1"

HOST: Final[str] = os.getenv("HOST", "127.0.0.1")
PORT: Final[int] = int(os.getenv("PORT", 8000))

if STORE_BACKEND == "sql" and DATABASE_URL.startswith("sqlite:///"):
    DATA_DIR.mkdir(parents=True, exist_ok=True)
