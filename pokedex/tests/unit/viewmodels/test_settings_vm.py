from __future__ import annotations

import pytest

from pokedex.viewmodels.settings_vm import SettingsConfig, SettingsVM, default_settings_payload


@pytest.fixture(autouse=True)
def _clear_debug_env(monkeypatch) -> None:
    for var in ("POKEDEX_LOG_LEVEL", "POKEDEX_DEBUG", "POKEDEX_DEBUG_LOGGING"):
        monkeypatch.delenv(var, raising=False)


def test_defaults_match_public_api() -> None:
    payload = default_settings_payload()

    assert payload == {
        "api_base_url": "https://pokeapi.co/api/v2",
        "request_timeout_s": 10,
        "retries": 2,
        "page_size": 20,
        "state_dir": ".",
        "debug_logging": False,
    }


def test_apply_dict_coerces_values() -> None:
    vm = SettingsVM()

    vm.apply_dict(
        {
            "api_base_url": " http://localhost:8000/api/v2/ ",
            "request_timeout_s": "15",
            "retries": 0,
            "page_size": 50.0,
            "state_dir": "",
            "debug_logging": "yes",
        }
    )

    assert vm.config == SettingsConfig(
        api_base_url="http://localhost:8000/api/v2",
        request_timeout_s=15,
        retries=0,
        page_size=50,
        state_dir=".",
    )
    assert vm.debug_logging is True


def test_apply_dict_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="Unsupported settings keys"):
        SettingsVM().apply_dict({"page_size": 10, "theme": "dark"})


@pytest.mark.parametrize(
    "payload",
    [
        {"page_size": 0},
        {"retries": -1},
        {"request_timeout_s": "soon"},
        {"page_size": True},
        {"api_base_url": "pokeapi.co"},
        {"api_base_url": ""},
    ],
)
def test_apply_dict_rejects_invalid_values(payload) -> None:
    vm = SettingsVM()

    with pytest.raises(ValueError):
        vm.apply_dict(payload)
    assert vm.config == SettingsConfig()


def test_round_trip_through_to_dict() -> None:
    vm = SettingsVM()
    vm.page_size = 30
    vm.retries = 5

    restored = SettingsVM()
    restored.apply_dict(vm.to_dict())

    assert restored.to_dict() == vm.to_dict()


def test_env_debug_flag_sets_default(monkeypatch) -> None:
    monkeypatch.setenv("POKEDEX_DEBUG", "1")

    assert SettingsVM().debug_logging is True


def test_cmd_save_hands_snapshot_to_callback() -> None:
    saved = []
    vm = SettingsVM(on_save=saved.append)
    vm.set_debug_logging(True)

    vm.cmd_save()

    assert saved == [vm.to_dict()]
    assert saved[0]["debug_logging"] is True
