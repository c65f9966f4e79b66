"""Result mappers from PokeAPI wire payloads to domain value objects.

Loaders call these functions on the raw JSON returned by the REST adapter.
They are pure: no I/O, no logging, and any malformed payload raises
``ValueError`` so the loader boundary can classify it.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .entities import (
    SPRITE_URL_TEMPLATE,
    Ability,
    Page,
    Pokemon,
    PokemonDetail,
    PokemonType,
    Stat,
)


def extract_id_from_url(url: str) -> int:
    """Return the numeric id at the end of a resource URL.

    ``https://pokeapi.co/api/v2/pokemon/25/`` -> ``25``.
    """
    if not isinstance(url, str) or not url.strip():
        raise ValueError("Resource URL must be a non-empty string.")
    segment = url.strip().rstrip("/").rsplit("/", 1)[-1]
    if not segment.isdigit():
        raise ValueError(f"Invalid Pokemon URL: {url}")
    return int(segment)


def capitalize_first(text: str) -> str:
    """Uppercase only the first character, leaving the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def humanize_name(raw: str) -> str:
    """Render API slugs for display: ``special-attack`` -> ``Special attack``."""
    return capitalize_first(str(raw or "").replace("-", " ").strip())


def sprite_url(pokemon_id: int) -> str:
    return SPRITE_URL_TEMPLATE.format(id=pokemon_id)


# ---------------------------------------------------------------------------
# List payloads
# ---------------------------------------------------------------------------
def map_summary(entry: Mapping[str, Any]) -> Pokemon:
    """Map one ``results[]`` entry of the list endpoint."""
    if not isinstance(entry, Mapping):
        raise ValueError("List entry must be an object.")
    raw_id = entry.get("id")
    if raw_id is None:
        pokemon_id = extract_id_from_url(entry.get("url"))
    else:
        pokemon_id = _require_int(raw_id, "id")
    name = entry.get("name")
    if not isinstance(name, str):
        raise ValueError(f"List entry {pokemon_id}: name must be a string.")
    return Pokemon(id=pokemon_id, name=capitalize_first(name), image_url=sprite_url(pokemon_id))


def map_page(raw: Mapping[str, Any]) -> Page:
    """Map a list response to a :class:`Page`, preserving server order.

    ``has_more`` follows the presence of a ``next`` link.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("List payload must be an object.")
    results = raw.get("results")
    if results is None:
        results = []
    if not isinstance(results, list):
        raise ValueError("List payload: results must be a list.")
    total = raw.get("count")
    return Page(
        items=tuple(map_summary(entry) for entry in results),
        has_more=raw.get("next") is not None,
        total=total if isinstance(total, int) and not isinstance(total, bool) else None,
    )


# ---------------------------------------------------------------------------
# Detail payloads
# ---------------------------------------------------------------------------
def map_detail(raw: Mapping[str, Any]) -> PokemonDetail:
    """Map a ``/pokemon/{id}/`` response to :class:`PokemonDetail`.

    Types and abilities are stably sorted by slot, so entries sharing a slot
    keep their original relative order. Missing ``base_experience`` maps to 0
    and a missing sprite to an empty string.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("Detail payload must be an object.")
    name = raw.get("name")
    if not isinstance(name, str):
        raise ValueError("Detail payload: name must be a string.")

    types = sorted((_map_type(item) for item in _list_of(raw, "types")), key=lambda t: t.slot)
    abilities = sorted(
        (_map_ability(item) for item in _list_of(raw, "abilities")), key=lambda a: a.slot
    )
    stats = [_map_stat(item) for item in _list_of(raw, "stats")]

    return PokemonDetail(
        id=_require_int(raw.get("id"), "id"),
        name=capitalize_first(name),
        height=_int_or_zero(raw.get("height"), "height"),
        weight=_int_or_zero(raw.get("weight"), "weight"),
        base_experience=_int_or_zero(raw.get("base_experience"), "base_experience"),
        types=tuple(types),
        stats=tuple(stats),
        abilities=tuple(abilities),
        image_url=_front_sprite(raw.get("sprites")),
    )


def _map_type(item: Mapping[str, Any]) -> PokemonType:
    return PokemonType(
        name=humanize_name(_nested_name(item, "type")),
        slot=_require_int(item.get("slot"), "types[].slot"),
    )


def _map_ability(item: Mapping[str, Any]) -> Ability:
    return Ability(
        name=humanize_name(_nested_name(item, "ability")),
        is_hidden=bool(item.get("is_hidden", False)),
        slot=_require_int(item.get("slot"), "abilities[].slot"),
    )


def _map_stat(item: Mapping[str, Any]) -> Stat:
    return Stat(
        name=humanize_name(_nested_name(item, "stat")),
        base_stat=_require_int(item.get("base_stat"), "stats[].base_stat"),
        effort=_int_or_zero(item.get("effort"), "stats[].effort"),
    )


def _front_sprite(sprites: Any) -> str:
    if not isinstance(sprites, Mapping):
        return ""
    value = sprites.get("front_default")
    return value if isinstance(value, str) else ""


def _list_of(raw: Mapping[str, Any], key: str) -> List[Mapping[str, Any]]:
    value = raw.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"Detail payload: {key} must be a list.")
    entries = [item for item in value if isinstance(item, Mapping)]
    if len(entries) != len(value):
        raise ValueError(f"Detail payload: {key} entries must be objects.")
    return entries


def _nested_name(item: Mapping[str, Any], key: str) -> str:
    ref = item.get(key)
    if not isinstance(ref, Mapping) or not isinstance(ref.get("name"), str):
        raise ValueError(f"Detail payload: {key}.name missing.")
    return ref["name"]


def _require_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer.")
    return value


def _int_or_zero(value: Optional[Any], name: str) -> int:
    if value is None:
        return 0
    return _require_int(value, name)


__all__ = [
    "capitalize_first",
    "extract_id_from_url",
    "humanize_name",
    "map_detail",
    "map_page",
    "map_summary",
    "sprite_url",
]
