"""View model for the detail screen of one Pokémon.

A detail view model is bound to a single id for its whole life; showing a
different Pokémon means constructing a new instance.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Tuple

from pokedex.domain.entities import PokemonDetail, RestorableState
from pokedex.domain.mapping import map_detail
from pokedex.domain.ports import PokemonDetailPort, PokemonId, StateStorePort, detail_state_key
from pokedex.usecases.restorable_state import RestorableStateAdapter

from .loader import LoaderState, Loading, ResourceLoader, StateListener


class PokemonDetailVM:
    """Detail loader: single-key fetch with replace semantics and no pagination."""

    def __init__(
        self,
        port: PokemonDetailPort,
        pokemon_id: PokemonId,
        state_store: StateStorePort,
    ) -> None:
        if isinstance(pokemon_id, bool) or not isinstance(pokemon_id, int) or pokemon_id <= 0:
            raise ValueError("pokemon_id must be a positive integer.")
        self._port = port
        self.pokemon_id = pokemon_id
        self._restorable = RestorableStateAdapter(state_store, detail_state_key(pokemon_id))
        self.restored: RestorableState = self._restorable.read() or RestorableState()
        self.loader: ResourceLoader[PokemonDetail] = ResourceLoader(
            self._load_detail,
            name=f"pokemon_detail[{pokemon_id}]",
        )

    @property
    def state(self) -> LoaderState:
        return self.loader.state

    @property
    def restored_scroll_index(self) -> int:
        return self.restored.scroll_index

    @property
    def restored_scroll_offset(self) -> int:
        return self.restored.scroll_offset

    def subscribe(self, listener: StateListener, *, replay: bool = True) -> Callable[[], None]:
        return self.loader.subscribe(listener, replay=replay)

    def start(self) -> Optional[asyncio.Task]:
        """Load on first show; no-op once content or an error is displayed."""
        if self.loader.is_loading or not isinstance(self.state, Loading):
            return None
        return self.loader.load_initial()

    def load(self) -> Optional[asyncio.Task]:
        return self.loader.load_initial()

    def retry(self) -> Optional[asyncio.Task]:
        return self.loader.retry()

    def save_scroll_position(self, first_visible_index: int, first_visible_offset: int) -> None:
        self._restorable.update_scroll(first_visible_index, first_visible_offset)

    def close(self) -> None:
        self.loader.close()

    async def wait_idle(self) -> None:
        await self.loader.wait_idle()

    async def _load_detail(self) -> Tuple[PokemonDetail, bool]:
        raw = await self._port.fetch_detail(self.pokemon_id)
        return map_detail(raw), False


__all__ = ["PokemonDetailVM"]
