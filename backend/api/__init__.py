"""
Chirp API package.

Provides the FastAPI application for the Chirp social network backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
