"""Per-request authentication state derived from the session cookie."""
from __future__ import annotations

import secrets
from dataclasses import dataclass

from fastapi import Request

from fitness_planner.config import get_settings


@dataclass(frozen=True)
class SessionContext:
    """Authentication state for a single request, passed explicitly to views."""

    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def get_session_context(request: Request) -> SessionContext:
    """FastAPI dependency reading the session cookie."""

    cookie_name = get_settings().session_cookie_name
    return SessionContext(token=request.cookies.get(cookie_name) or None)
