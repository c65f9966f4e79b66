from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

PokemonId = int
StateKey = str

RawPayload = Dict[str, Any]


# ---- Ports (Hexagonal boundaries) ----
class PokemonListPort(Protocol):
    """Remote resource client for the paginated list endpoint.

    One call performs one HTTP GET and either returns the raw JSON payload or
    raises a transport/protocol failure.
    """

    async def fetch_page(self, limit: int, offset: int) -> RawPayload: ...


class PokemonDetailPort(Protocol):
    """Remote resource client for the keyed detail endpoint."""

    async def fetch_detail(self, pokemon_id: PokemonId) -> RawPayload: ...


class StateStorePort(Protocol):
    """Durable key-value store for small scalar UI state.

    Implementations may lose data between restarts; ``get`` returns ``None``
    for unknown keys.
    """

    def get(self, key: StateKey) -> Optional[Dict[str, Any]]: ...
    def set(self, key: StateKey, value: Dict[str, Any]) -> None: ...


def list_state_key() -> StateKey:
    return "pokemon_list"


def detail_state_key(pokemon_id: PokemonId) -> StateKey:
    return f"pokemon_detail:{int(pokemon_id)}"
