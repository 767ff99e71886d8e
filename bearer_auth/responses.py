"""Helpers for route handlers that reject unauthenticated requests."""

from __future__ import annotations

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Content-Type": "application/json",
}


def unauthorized_response() -> tuple[int, dict, dict[str, str]]:
    """Return ``(status, body, headers)`` for a 401 response.

    The body is identical for every rejection reason.
    """
    return 401, {"error": "Unauthorized"}, dict(CORS_HEADERS)
