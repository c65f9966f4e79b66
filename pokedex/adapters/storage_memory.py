from __future__ import annotations

from typing import Any, Dict, Optional

from pokedex.domain.ports import StateKey, StateStorePort


class StorageMemory(StateStorePort):
    """Transient state store; everything is lost when the process exits."""

    def __init__(self, initial: Optional[Dict[StateKey, Dict[str, Any]]] = None) -> None:
        self._data: Dict[StateKey, Dict[str, Any]] = {
            key: dict(value) for key, value in (initial or {}).items()
        }

    def get(self, key: StateKey) -> Optional[Dict[str, Any]]:
        entry = self._data.get(key)
        return dict(entry) if entry is not None else None

    def set(self, key: StateKey, value: Dict[str, Any]) -> None:
        self._data[key] = dict(value)

    def clear(self) -> None:
        """Drop everything, as a process restart would."""
        self._data.clear()


__all__ = ["StorageMemory"]
