from fastapi import FastAPI

from .attendance import router as attendance_router
from .auth import router as auth_router
from .notifications import router as notifications_router
from .programs import router as programs_router


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(auth_router)
    app.include_router(notifications_router)
    app.include_router(attendance_router)
    app.include_router(programs_router)
