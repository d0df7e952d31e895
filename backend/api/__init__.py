"""
Hifz API package.

Provides the FastAPI application for purchase webhooks, license activation
and profile reconciliation.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
