"""
BuildScape API package.

Provides the FastAPI application for the construction services marketplace.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
