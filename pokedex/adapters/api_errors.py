"""Typed failures raised by the PokeAPI adapter layer.

The REST adapter converts every non-2xx response into one of these classes
so the error classifier can decide between protocol and transport failures
without inspecting ``requests`` objects.
"""

from __future__ import annotations

from typing import Any, Optional

_SNIPPET_LIMIT = 400
_DETAIL_KEYS = ("detail", "message", "error", "title")
_HINT_KEYS = ("hint", "details", "errors")


class ApiError(RuntimeError):
    """Base class for catalog API failures.

    Attributes:
        status: HTTP status code, or ``None`` when no usable response arrived.
        payload: Decoded error body (JSON value or a text snippet).
        hint: Secondary detail extracted from the payload.
        context: Short label of the request, e.g. ``pokemon_detail[25]``.
    """

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        hint: Optional[str] = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.hint = hint
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx, e.g. an unknown Pokémon id."""


class ApiServerError(ApiError):
    """HTTP 5xx from the catalog API."""


class ApiTimeoutError(ApiError):
    """The server was never reached: timeout, refused or reset connection."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Decode an error body as JSON, falling back to a text snippet."""
    try:
        return resp.json()
    except Exception:
        text = getattr(resp, "text", "") or ""
        return text[:_SNIPPET_LIMIT] or None


def error_detail(payload: Any) -> Optional[str]:
    """Find the first human-readable string in an error payload.

    PokeAPI answers unknown ids with a plain ``Not Found`` body; other
    deployments may send ``{"detail": ...}`` objects or lists of them.
    """
    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, list):
        for item in payload:
            found = error_detail(item)
            if found:
                return found
        return None
    if isinstance(payload, dict):
        for key in _DETAIL_KEYS:
            found = error_detail(payload.get(key))
            if found:
                return found
    return None


def error_hint(payload: Any) -> Optional[str]:
    if not isinstance(payload, dict):
        return None
    for key in _HINT_KEYS:
        value = payload.get(key)
        if isinstance(value, (list, tuple)):
            parts = [str(v).strip() for v in value[:3] if str(v).strip()]
            value = "; ".join(parts)
        text = str(value).strip() if value is not None else ""
        if text:
            return text[:200]
    return None


def build_error_message(ctx: str, status: int, payload: Any) -> str:
    detail = error_detail(payload)
    suffix = f"HTTP {status}"
    return f"{ctx}: {detail} ({suffix})" if detail else f"{ctx}: {suffix}"


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "build_error_message",
    "error_detail",
    "error_hint",
    "parse_error_payload",
]
