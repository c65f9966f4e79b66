"""REST adapter for the public PokeAPI.

Implements ``PokemonListPort`` and ``PokemonDetailPort``. Each port call maps
to exactly one logical HTTP GET (``RetryingSession`` may repeat it on
transport failures) and returns the decoded JSON payload untouched; result
mapping happens in ``pokedex.domain.mapping``.

The blocking ``requests`` call runs in a worker thread via
``asyncio.to_thread`` so loaders can await it on the UI event loop. If the
awaiting task is cancelled the thread finishes in the background and its
result is discarded.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional, Type

import requests

from pokedex.domain.ports import PokemonDetailPort, PokemonId, PokemonListPort

from .api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    build_error_message,
    error_hint,
    parse_error_payload,
)
from .http_client import HttpConfig, RetryingSession

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


def _error_class(status: int) -> Type[ApiError]:
    if 400 <= status < 500:
        return ApiClientError
    if 500 <= status < 600:
        return ApiServerError
    return ApiError


class PokeApiRestAdapter(PokemonListPort, PokemonDetailPort):
    """Remote resource client for ``/pokemon/`` and ``/pokemon/{id}/``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        request_timeout_s: int = 10,
        retries: int = 2,
        session: Optional[RetryingSession] = None,
    ) -> None:
        cleaned = str(base_url or "").strip().rstrip("/")
        if not cleaned:
            raise ValueError("PokeApiRestAdapter requires a base URL")
        self.base_url = cleaned
        self.cfg = HttpConfig(request_timeout_s=request_timeout_s, retries=retries)
        self.session = session or RetryingSession(self.cfg)
        self._log = logging.getLogger(__name__)

    async def fetch_page(self, limit: int, offset: int) -> Dict[str, Any]:
        return await asyncio.to_thread(self.get_pokemon_list, limit, offset)

    async def fetch_detail(self, pokemon_id: PokemonId) -> Dict[str, Any]:
        return await asyncio.to_thread(self.get_pokemon_detail, pokemon_id)

    def get_pokemon_list(self, limit: int, offset: int) -> Dict[str, Any]:
        """GET one page of the catalog.

        Raises:
            ValueError: ``limit`` is not positive or ``offset`` is negative.
            ApiError: Non-2xx status or a body that is not a JSON object.
            ApiTimeoutError: The server could not be reached.
        """
        if limit <= 0:
            raise ValueError("limit must be positive")
        if offset < 0:
            raise ValueError("offset must be non-negative")
        ctx = f"pokemon_list[limit={limit},offset={offset}]"
        resp = self.session.get(f"{self.base_url}/pokemon/", params={"limit": limit, "offset": offset})
        return self._decode(resp, ctx)

    def get_pokemon_detail(self, pokemon_id: PokemonId) -> Dict[str, Any]:
        ctx = f"pokemon_detail[{pokemon_id}]"
        resp = self.session.get(f"{self.base_url}/pokemon/{int(pokemon_id)}/")
        return self._decode(resp, ctx)

    def close(self) -> None:
        self.session.close()

    def _decode(self, resp: requests.Response, ctx: str) -> Dict[str, Any]:
        status = resp.status_code
        if not 200 <= status < 300:
            payload = parse_error_payload(resp)
            raise _error_class(status)(
                build_error_message(ctx, status, payload),
                status=status,
                payload=payload,
                hint=error_hint(payload),
                context=ctx,
            )
        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (getattr(resp, "text", "") or "")[:200]
            raise ApiError(f"{ctx}: invalid JSON response: {snippet}", context=ctx) from exc
        if not isinstance(data, dict):
            raise ApiError(f"{ctx}: expected a JSON object, got {type(data).__name__}", context=ctx)
        self._log.debug("%s -> HTTP %s", ctx, status)
        return data


__all__ = ["DEFAULT_BASE_URL", "PokeApiRestAdapter"]
