"""Domain package exports for value objects, error kinds, and mappers."""

from .entities import (
    DEFAULT_PAGE_SIZE,
    MAX_BASE_STAT,
    Ability,
    Cursor,
    Page,
    Pokemon,
    PokemonDetail,
    PokemonType,
    RestorableState,
    Stat,
)
from .errors import ErrorKind, NetworkUnavailable, ProtocolError, Unexpected
from .mapping import extract_id_from_url, humanize_name, map_detail, map_page

__all__ = [
    "Ability",
    "Cursor",
    "DEFAULT_PAGE_SIZE",
    "ErrorKind",
    "MAX_BASE_STAT",
    "NetworkUnavailable",
    "Page",
    "Pokemon",
    "PokemonDetail",
    "PokemonType",
    "ProtocolError",
    "RestorableState",
    "Stat",
    "Unexpected",
    "extract_id_from_url",
    "humanize_name",
    "map_detail",
    "map_page",
]
