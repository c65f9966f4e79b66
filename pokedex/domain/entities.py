from __future__ import annotations

"""Domain value objects shared by mappers, loaders, and state adapters."""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

SPRITE_URL_TEMPLATE = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/pokemon/{id}.png"
)
MAX_BASE_STAT = 255
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class Pokemon:
    """One catalog entry as rendered in the list screen."""

    id: int
    name: str
    image_url: str

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or self.id <= 0:
            raise ValueError("Pokemon id must be a positive integer.")


@dataclass(frozen=True)
class PokemonType:
    """Categorical tag attached to a Pokémon (``grass``, ``poison`` ...)."""

    name: str
    slot: int


@dataclass(frozen=True)
class Stat:
    """Named numeric attribute bounded by :data:`MAX_BASE_STAT`."""

    name: str
    base_stat: int
    effort: int = 0

    @property
    def fraction(self) -> float:
        """Share of the stat bar to fill, in ``[0.0, 1.0]``."""
        return min(max(self.base_stat, 0), MAX_BASE_STAT) / MAX_BASE_STAT


@dataclass(frozen=True)
class Ability:
    """Named capability; hidden abilities are flagged by the server."""

    name: str
    is_hidden: bool
    slot: int


@dataclass(frozen=True)
class PokemonDetail:
    """Expanded information for one Pokémon shown on the detail screen.

    ``types`` and ``abilities`` are ordered by their server-declared slot;
    ``stats`` keep server order.
    """

    id: int
    name: str
    height: int
    weight: int
    base_experience: int
    types: Tuple[PokemonType, ...] = ()
    stats: Tuple[Stat, ...] = ()
    abilities: Tuple[Ability, ...] = ()
    image_url: str = ""


@dataclass(frozen=True)
class Page:
    """One batch of list entries returned by a single list fetch."""

    items: Tuple[Pokemon, ...]
    has_more: bool
    total: Optional[int] = None


@dataclass(frozen=True)
class Cursor:
    """Pagination position: offset equals the count of accumulated items."""

    offset: int = 0
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.offset < 0:
            raise ValueError("Cursor offset must be non-negative.")
        if self.limit <= 0:
            raise ValueError("Cursor limit must be positive.")

    def advance(self, accumulated: int) -> "Cursor":
        if accumulated < self.offset:
            raise ValueError("Cursor offset cannot move backwards.")
        return Cursor(offset=accumulated, limit=self.limit)

    def reset(self) -> "Cursor":
        return Cursor(offset=0, limit=self.limit)


@dataclass(frozen=True)
class RestorableState:
    """Small UI-position record persisted across process recreation."""

    scroll_index: int = 0
    scroll_offset: int = 0
    scroll_anchor_id: Optional[int] = None
    last_selected_id: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "scroll_index": self.scroll_index,
            "scroll_offset": self.scroll_offset,
            "scroll_anchor_id": self.scroll_anchor_id,
            "last_selected_id": self.last_selected_id,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "RestorableState":
        """Build a record from persisted JSON, raising ``ValueError`` on bad shapes."""
        if not isinstance(payload, Mapping):
            raise ValueError("Restorable state payload must be a mapping.")
        return cls(
            scroll_index=_non_negative_int(payload.get("scroll_index"), "scroll_index"),
            scroll_offset=_non_negative_int(payload.get("scroll_offset"), "scroll_offset"),
            scroll_anchor_id=_optional_id(payload.get("scroll_anchor_id"), "scroll_anchor_id"),
            last_selected_id=_optional_id(payload.get("last_selected_id"), "last_selected_id"),
        )


def _non_negative_int(value: Any, name: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer.")
    if value < 0:
        raise ValueError(f"{name} must be non-negative.")
    return value


def _optional_id(value: Any, name: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer or null.")
    return value


__all__ = [
    "Ability",
    "Cursor",
    "DEFAULT_PAGE_SIZE",
    "MAX_BASE_STAT",
    "Page",
    "Pokemon",
    "PokemonDetail",
    "PokemonType",
    "RestorableState",
    "SPRITE_URL_TEMPLATE",
    "Stat",
]
