"""Classify remote-client failures and translate them into user-facing text.

``classify_error`` is the loader boundary: every exception raised by a
remote port ends up as exactly one ``ErrorKind``. ``error_message`` renders
the fixed message shown by failed screens and transient notices.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from requests import exceptions as req_exc

from pokedex.adapters.api_errors import ApiError, ApiTimeoutError, error_detail
from pokedex.domain.errors import ErrorKind, NetworkUnavailable, ProtocolError, Unexpected

NETWORK_MESSAGE = "Network error. Please check your connection."
UNEXPECTED_MESSAGE = "An unexpected error occurred."
UNKNOWN_PROTOCOL_DETAIL = "Unknown error"

_NETWORK_ERRORS = (
    ApiTimeoutError,
    req_exc.Timeout,
    req_exc.ConnectionError,
    TimeoutError,
    ConnectionError,
)


def classify_error(exc: BaseException) -> ErrorKind:
    """Map a raised failure to ``NetworkUnavailable``, ``ProtocolError`` or ``Unexpected``.

    Args:
        exc: Exception raised by a remote port or a result mapper.

    Returns:
        ErrorKind: Exactly one classification; never raises for ``Exception``
        inputs.

    Raises:
        asyncio.CancelledError: Re-raised unchanged; cancellation is never
            classified.
    """
    if isinstance(exc, asyncio.CancelledError):
        raise exc
    if isinstance(exc, _NETWORK_ERRORS):
        return NetworkUnavailable()
    if isinstance(exc, ApiError) and _is_status(exc.status):
        return ProtocolError(status_code=exc.status, message=_api_detail(exc))
    response = getattr(exc, "response", None)
    if isinstance(exc, req_exc.HTTPError) and _is_status(getattr(response, "status_code", None)):
        return ProtocolError(
            status_code=response.status_code,
            message=getattr(response, "reason", None) or str(exc) or None,
        )
    return Unexpected(cause=exc)


def error_message(kind: ErrorKind) -> str:
    """Render the fixed user-facing message for a classified error."""
    if isinstance(kind, NetworkUnavailable):
        return NETWORK_MESSAGE
    if isinstance(kind, ProtocolError):
        detail = (kind.message or "").strip() or UNKNOWN_PROTOCOL_DETAIL
        return f"HTTP error {kind.status_code}: {detail}"
    return UNEXPECTED_MESSAGE


def _is_status(value: object) -> bool:
    # requests.Response() starts with status_code None
    return isinstance(value, int) and not isinstance(value, bool)


def _api_detail(exc: ApiError) -> Optional[str]:
    """Prefer the server-provided detail over the adapter's context string."""
    detail = error_detail(exc.payload) or (exc.hint or "").strip()
    return detail or str(exc) or None


__all__ = [
    "NETWORK_MESSAGE",
    "UNEXPECTED_MESSAGE",
    "classify_error",
    "error_message",
]
