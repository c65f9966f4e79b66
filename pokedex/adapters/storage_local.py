from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pokedex.domain.ports import StateKey, StateStorePort

_log = logging.getLogger(__name__)


class StorageLocal(StateStorePort):
    """Local filesystem storage for restorable UI state and user settings (JSON)."""

    UI_STATE_FILE = "ui_state.json"
    SETTINGS_FILE = "user_settings.json"

    def __init__(self, root_dir: str = ".") -> None:
        self.root = root_dir

    # ---- Restorable UI state (one JSON object keyed by loader identity) ----
    def get(self, key: StateKey) -> Optional[Dict[str, Any]]:
        entry = self._read_ui_state().get(key)
        return dict(entry) if isinstance(entry, dict) else None

    def set(self, key: StateKey, value: Dict[str, Any]) -> None:
        data = self._read_ui_state()
        data[key] = dict(value)
        self._write_json(self.UI_STATE_FILE, data)

    # ---- User settings (JSON) ----
    def save_user_settings(self, payload: Dict[str, Any]) -> None:
        self._write_json(self.SETTINGS_FILE, payload)

    def load_user_settings(self) -> Optional[Dict[str, Any]]:
        path = os.path.join(self.root, self.SETTINGS_FILE)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object")
        return data

    # ------------------------------------------------------------------
    def _read_ui_state(self) -> Dict[str, Any]:
        path = os.path.join(self.root, self.UI_STATE_FILE)
        if not os.path.exists(path):
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            # Corrupt state reads as empty.
            _log.warning("Ignoring unreadable UI state file %s: %s", path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _write_json(self, name: str, payload: Dict[str, Any]) -> None:
        os.makedirs(self.root, exist_ok=True)
        path = os.path.join(self.root, name)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        os.replace(tmp_path, path)


__all__ = ["StorageLocal"]
