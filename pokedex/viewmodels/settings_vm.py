"""Settings view model: typed runtime configuration with validation.

No I/O happens here. ``StorageLocal`` persists the flat ``to_dict`` snapshot
and ``app.controller.load_settings`` feeds it back through ``apply_dict``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Callable, Dict, Mapping, Optional

from ..domain.entities import DEFAULT_PAGE_SIZE
from ..utils.logging import env_requests_debug

DEFAULT_API_BASE_URL = "https://pokeapi.co/api/v2"


@dataclass(frozen=True)
class SettingsConfig:
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: int = 10
    retries: int = 2
    page_size: int = DEFAULT_PAGE_SIZE
    state_dir: str = "."


def _as_url(name: str, value: Any) -> str:
    text = value.strip().rstrip("/") if isinstance(value, str) else ""
    if not text.startswith(("http://", "https://")):
        raise ValueError(f"{name} must be an http(s) URL.")
    return text


def _as_dir(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{name} must be a string path.")
    return value.strip() or "."


def _as_int(minimum: int) -> Callable[[str, Any], int]:
    def coerce(name: str, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"{name} must be an integer.")
        try:
            number = int(value.strip()) if isinstance(value, str) else int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"{name} must be an integer.") from exc
        if number < minimum:
            raise ValueError(f"{name} must be >= {minimum}.")
        return number

    return coerce


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


_COERCERS: Dict[str, Callable[[str, Any], Any]] = {
    "api_base_url": _as_url,
    "request_timeout_s": _as_int(1),
    "retries": _as_int(0),
    "page_size": _as_int(1),
    "state_dir": _as_dir,
}


def _setting(name: str) -> property:
    def getter(self: "SettingsVM") -> Any:
        return getattr(self.config, name)

    def setter(self: "SettingsVM", value: Any) -> None:
        self.config = replace(self.config, **{name: _COERCERS[name](name, value)})

    return property(getter, setter)


class SettingsVM:
    """Hold validated settings; every assignment goes through a coercer."""

    def __init__(
        self,
        *,
        config: Optional[SettingsConfig] = None,
        on_save: Optional[Callable[[dict], None]] = None,
    ) -> None:
        self.config = config or SettingsConfig()
        self.on_save = on_save
        self.debug_logging: bool = env_requests_debug()

    api_base_url = _setting("api_base_url")
    request_timeout_s = _setting("request_timeout_s")
    retries = _setting("retries")
    page_size = _setting("page_size")
    state_dir = _setting("state_dir")

    def apply_dict(self, payload: Mapping[str, Any]) -> None:
        """Apply a persisted snapshot; nothing changes if any value is invalid.

        Raises:
            ValueError: Unknown keys or a value that fails coercion.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Settings payload must be a mapping.")
        unknown = sorted(str(k) for k in payload if k not in _COERCERS and k != "debug_logging")
        if unknown:
            raise ValueError(f"Unsupported settings keys: {', '.join(unknown)}")
        updates = {
            name: coerce(name, payload[name])
            for name, coerce in _COERCERS.items()
            if name in payload
        }
        self.config = replace(self.config, **updates)
        if "debug_logging" in payload:
            self.debug_logging = _as_bool(payload["debug_logging"])

    def to_dict(self) -> dict:
        snapshot = asdict(self.config)
        snapshot["debug_logging"] = bool(self.debug_logging)
        return snapshot

    def set_debug_logging(self, enabled: bool) -> None:
        self.debug_logging = _as_bool(enabled)

    def cmd_save(self) -> None:
        if self.on_save:
            self.on_save(self.to_dict())


def default_settings_payload() -> dict:
    return SettingsVM().to_dict()
