"""View model for the paginated Pokémon list screen.

Call context:
    The presentation layer constructs one instance per list screen, calls
    ``start`` when the screen becomes visible, relays reached-bottom events to
    ``load_next``, the retry button to ``retry``, and scroll/selection events
    to ``on_scroll_position_changed`` / ``on_pokemon_selected``. It renders
    whatever ``state`` currently holds.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Optional, Tuple

from pokedex.domain.entities import DEFAULT_PAGE_SIZE, Cursor, Pokemon, RestorableState
from pokedex.domain.mapping import map_page
from pokedex.domain.ports import PokemonListPort, StateStorePort, list_state_key
from pokedex.usecases.restorable_state import RestorableStateAdapter

from .loader import LoaderState, Loading, NoticeListener, ResourceLoader, StateListener

Items = Tuple[Pokemon, ...]


class PokemonListVM:
    """List loader: offset/limit pagination with append semantics.

    The cursor offset always equals the number of Pokémon accumulated in
    ``Content.data``; it only goes back to zero on a full reload.
    """

    def __init__(
        self,
        port: PokemonListPort,
        state_store: StateStorePort,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Bind the remote client and read the restorable scroll state.

        Args:
            port: Remote resource client for the list endpoint.
            state_store: Durable store for scroll position and selection.
            page_size: Fixed page size used for every request.
        """
        self._port = port
        self._cursor = Cursor(offset=0, limit=page_size)
        self._restorable = RestorableStateAdapter(state_store, list_state_key())
        self.restored: RestorableState = self._restorable.read() or RestorableState()
        self.loader: ResourceLoader[Items] = ResourceLoader(
            self._load_first_page,
            append=self._load_next_page,
            name="pokemon_list",
        )

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------
    @property
    def state(self) -> LoaderState:
        return self.loader.state

    @property
    def cursor(self) -> Cursor:
        return self._cursor

    @property
    def restored_scroll_index(self) -> int:
        return self.restored.scroll_index

    @property
    def restored_scroll_offset(self) -> int:
        return self.restored.scroll_offset

    @property
    def restored_scroll_anchor_id(self) -> Optional[int]:
        return self.restored.scroll_anchor_id

    @property
    def restored_last_selected_id(self) -> Optional[int]:
        return self.restored.last_selected_id

    def subscribe(self, listener: StateListener, *, replay: bool = True) -> Callable[[], None]:
        return self.loader.subscribe(listener, replay=replay)

    def subscribe_notices(self, listener: NoticeListener) -> Callable[[], None]:
        return self.loader.subscribe_notices(listener)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def start(self) -> Optional[asyncio.Task]:
        """Load the first page when the screen is first shown.

        No-op when content or an error is already displayed, or a load is
        running.
        """
        if self.loader.is_loading or not isinstance(self.state, Loading):
            return None
        return self.loader.load_initial()

    def load_initial(self) -> Optional[asyncio.Task]:
        return self.loader.load_initial()

    def load_next(self) -> Optional[asyncio.Task]:
        return self.loader.load_next()

    def retry(self) -> Optional[asyncio.Task]:
        return self.loader.retry()

    def on_scroll_position_changed(
        self,
        first_visible_index: int,
        first_visible_offset: int,
        anchor_pokemon_id: Optional[int] = None,
    ) -> None:
        self._restorable.update_scroll(first_visible_index, first_visible_offset, anchor_pokemon_id)

    def on_scroll_anchor_changed(self, pokemon_id: int) -> None:
        """Persist an anchor Pokémon without touching index/offset."""
        self._restorable.update_anchor(pokemon_id)

    def on_pokemon_selected(self, pokemon_id: int) -> None:
        self._restorable.update_selection(pokemon_id)

    def close(self) -> None:
        self.loader.close()

    async def wait_idle(self) -> None:
        await self.loader.wait_idle()

    # ------------------------------------------------------------------
    # Fetch strategies
    # ------------------------------------------------------------------
    async def _load_first_page(self) -> Tuple[Items, bool]:
        self._cursor = self._cursor.reset()
        raw = await self._port.fetch_page(self._cursor.limit, self._cursor.offset)
        page = map_page(raw)
        self._cursor = self._cursor.advance(len(page.items))
        return page.items, page.has_more

    async def _load_next_page(self, items: Items) -> Tuple[Items, bool]:
        raw = await self._port.fetch_page(self._cursor.limit, self._cursor.offset)
        page = map_page(raw)
        merged = tuple(items) + page.items
        self._cursor = self._cursor.advance(len(merged))
        return merged, page.has_more


__all__ = ["PokemonListVM"]
