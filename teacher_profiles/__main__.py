"""Run the service with uvicorn."""
from __future__ import annotations

import uvicorn

from .config import HOST, PORT


def main() -> None:  # pragma: no cover - manual entry point
    uvicorn.run("teacher_profiles.app:app", host=HOST, port=PORT)


if __name__ == "__main__":  # pragma: no cover
    main()
