"""Adapter and view-model wiring for the Pokédex client runtime.

This module owns lazy construction of the concrete REST adapter and state
store that depend on values in :class:`pokedex.viewmodels.settings_vm.SettingsVM`.
Screens ask it for fresh list/detail view models when they become visible.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..adapters.pokeapi_rest import PokeApiRestAdapter
from ..adapters.storage_local import StorageLocal
from ..domain.ports import PokemonId, StateStorePort
from ..utils.logging import apply_gui_preferences, configure_root, level_name
from ..viewmodels.pokemon_detail_vm import PokemonDetailVM
from ..viewmodels.pokemon_list_vm import PokemonListVM
from ..viewmodels.settings_vm import SettingsVM


class AppController:
    """Create and cache runtime adapters from settings state.

    Call chain:
        The host application creates one instance and calls ``list_vm`` or
        ``detail_vm`` whenever a screen is shown. Both call ``ensure_ready``
        so the adapter and store always reflect the current settings.
    """

    def __init__(
        self,
        settings_vm: SettingsVM,
        *,
        store: Optional[StateStorePort] = None,
    ) -> None:
        """Initialize controller with settings-backed lazy dependencies.

        The root logger handler is installed here, once per process.

        Args:
            settings_vm: Settings state with API URL, timeout, retry and page
                size preferences used to build the adapter and view models.
            store: Optional state store override. Defaults to a
                :class:`StorageLocal` rooted at ``settings_vm.state_dir``.
        """
        self.settings_vm = settings_vm
        self._store_override = store
        self._adapter: Optional[PokeApiRestAdapter] = None
        self._store: Optional[StateStorePort] = None
        self._log = logging.getLogger(__name__)
        configure_root(logging.DEBUG if settings_vm.debug_logging else logging.INFO)

    @property
    def adapter(self) -> Optional[PokeApiRestAdapter]:
        """Return the cached REST adapter used by list and detail screens."""
        return self._adapter

    @property
    def store(self) -> Optional[StateStorePort]:
        return self._store

    def reset(self) -> None:
        """Drop cached runtime objects so the next call rebuilds from settings."""
        if self._adapter is not None:
            self._adapter.close()
        self._adapter = None
        self._store = None

    def close(self) -> None:
        self.reset()

    def ensure_ready(self) -> bool:
        """Ensure the adapter and store exist for the current settings.

        Returns:
            ``True`` when dependencies are available, ``False`` when the API
            base URL is missing from settings.
        """
        if self._adapter is not None and self._store is not None:
            return True

        base_url = (self.settings_vm.api_base_url or "").strip()
        if not base_url:
            return False

        level = apply_gui_preferences(self.settings_vm.debug_logging)
        self._log.debug("Runtime log level: %s", level_name(level))

        if self._adapter is None:
            self._adapter = PokeApiRestAdapter(
                base_url,
                request_timeout_s=self.settings_vm.request_timeout_s,
                retries=self.settings_vm.retries,
            )
        if self._store is None:
            self._store = (
                self._store_override
                if self._store_override is not None
                else StorageLocal(self.settings_vm.state_dir)
            )
        return True

    def list_vm(self) -> PokemonListVM:
        """Build a list view model bound to the cached adapter and store."""
        self._require_ready()
        return PokemonListVM(
            self._adapter,
            self._store,
            page_size=self.settings_vm.page_size,
        )

    def detail_vm(self, pokemon_id: PokemonId) -> PokemonDetailVM:
        """Build a detail view model for one Pokémon id.

        Raises:
            ValueError: If ``pokemon_id`` is not a positive integer.
        """
        self._require_ready()
        return PokemonDetailVM(self._adapter, pokemon_id, self._store)

    def _require_ready(self) -> None:
        if not self.ensure_ready():
            raise RuntimeError("API base URL is not configured.")


def load_settings(storage: StorageLocal, settings_vm: Optional[SettingsVM] = None) -> SettingsVM:
    """Apply persisted user settings from ``storage`` onto a settings VM.

    ``cmd_save`` on the returned VM writes back to the same ``storage`` unless
    the caller already gave it a save callback.
    """
    vm = settings_vm or SettingsVM()
    if vm.on_save is None:
        vm.on_save = storage.save_user_settings
    payload = storage.load_user_settings()
    if payload:
        vm.apply_dict(payload)
    return vm


__all__ = ["AppController", "load_settings"]
