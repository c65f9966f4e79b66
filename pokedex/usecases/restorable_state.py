"""Restorable scroll/selection state backed by a ``StateStorePort``.

Loaders read the record once at construction to seed the initial scroll
position; the presentation layer writes on every scroll or selection change.
Writes are fire-and-forget and last-write-wins. Missing or damaged records
read as ``None``: a store that forgets everything between restarts is a
normal configuration, not an error.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from pokedex.domain.entities import RestorableState
from pokedex.domain.ports import StateKey, StateStorePort


class RestorableStateAdapter:
    """Read/write one ``RestorableState`` record under a fixed store key."""

    def __init__(self, store: StateStorePort, key: StateKey) -> None:
        """Bind the adapter to a store and the owning loader's identity key.

        Args:
            store: Durable (or transient) key-value store.
            key: Stable key per loader identity, e.g. ``pokemon_detail:25``.
        """
        self._store = store
        self.key = key
        self._last: Optional[RestorableState] = None
        self._log = logging.getLogger(__name__)

    def read(self) -> Optional[RestorableState]:
        """Return the persisted record, or ``None`` when nothing usable is stored."""
        try:
            payload = self._store.get(self.key)
        except Exception as exc:
            self._log.warning("Reading UI state %r failed: %s", self.key, exc)
            return None
        if payload is None:
            return None
        try:
            state = RestorableState.from_dict(payload)
        except ValueError as exc:
            self._log.warning("Discarding malformed UI state %r: %s", self.key, exc)
            return None
        self._last = state
        return state

    def write(self, state: RestorableState) -> None:
        """Persist ``state``; failures are logged and dropped."""
        self._last = state
        try:
            self._store.set(self.key, state.to_dict())
        except Exception as exc:
            self._log.warning("Writing UI state %r failed: %s", self.key, exc)

    def update_scroll(
        self,
        index: int,
        offset: int,
        anchor_id: Optional[int] = None,
    ) -> RestorableState:
        """Merge a scroll position into the last record and write it.

        ``anchor_id`` keeps its previous value when not given.
        """
        current = self._current()
        state = replace(
            current,
            scroll_index=max(0, int(index)),
            scroll_offset=max(0, int(offset)),
            scroll_anchor_id=anchor_id if anchor_id is not None else current.scroll_anchor_id,
        )
        self.write(state)
        return state

    def update_anchor(self, anchor_id: int) -> RestorableState:
        """Record an anchor item without touching index/offset."""
        state = replace(self._current(), scroll_anchor_id=int(anchor_id))
        self.write(state)
        return state

    def update_selection(self, selected_id: int) -> RestorableState:
        state = replace(self._current(), last_selected_id=int(selected_id))
        self.write(state)
        return state

    def _current(self) -> RestorableState:
        return self._last if self._last is not None else RestorableState()


__all__ = ["RestorableStateAdapter"]
