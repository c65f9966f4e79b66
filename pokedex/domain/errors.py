"""Domain-level error kinds for loader state and user-facing messages.

These are values, not exceptions: the loader boundary classifies whatever the
remote client raised into exactly one of the kinds below, and nothing above
the loader ever sees the raw failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class NetworkUnavailable:
    """Connection or timeout class failure; the server was never reached."""


@dataclass(frozen=True)
class ProtocolError:
    """The server responded with a non-success status."""

    status_code: int
    message: Optional[str] = None


@dataclass(frozen=True)
class Unexpected:
    """Anything the classifier does not recognize."""

    cause: BaseException

    def __eq__(self, other: object) -> bool:
        # Exception instances compare by identity; use type and text.
        if not isinstance(other, Unexpected):
            return NotImplemented
        return type(self.cause) is type(other.cause) and str(self.cause) == str(other.cause)

    def __hash__(self) -> int:
        return hash((type(self.cause), str(self.cause)))


ErrorKind = Union[NetworkUnavailable, ProtocolError, Unexpected]


__all__ = ["ErrorKind", "NetworkUnavailable", "ProtocolError", "Unexpected"]
