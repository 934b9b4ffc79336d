"""API package exposing the FastAPI application."""

from .app import app

__all__ = ["app"]
