"""
Router registration for the TicTacToe API.
"""
from fastapi import FastAPI

from app.api import engine, games, meta


def include_routers(app: FastAPI) -> None:
    """Include all API routers with the FastAPI application."""
    app.include_router(engine.router, prefix="/api/v1", tags=["engine"])
    app.include_router(games.router, prefix="/api/v1", tags=["games"])
    app.include_router(meta.router, prefix="/api/v1", tags=["meta"])
