"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

from fastapi import Request

from database.store import UserStore


def get_user_store(request: Request) -> UserStore:
    """Return the store the application created at startup."""
    return request.app.state.user_store
