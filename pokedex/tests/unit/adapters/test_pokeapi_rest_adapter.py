from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Sequence, Union

import pytest
from requests import exceptions as req_exc

from pokedex.adapters.api_errors import ApiClientError, ApiError, ApiServerError, ApiTimeoutError
from pokedex.adapters.http_client import HttpConfig, RetryingSession
from pokedex.adapters.pokeapi_rest import PokeApiRestAdapter


class _ResponseStub:
    def __init__(self, payload: Any, status_code: int = 200, text: Optional[str] = None) -> None:
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else str(payload)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _SessionStub:
    def __init__(self, responses: Sequence[Union[_ResponseStub, Exception]]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[int] = None,
    ) -> _ResponseStub:
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if not self._responses:
            raise RuntimeError("No stub response configured")
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


def _adapter(stub: _SessionStub, *, retries: int = 0) -> PokeApiRestAdapter:
    cfg = HttpConfig(request_timeout_s=5, retries=retries)
    return PokeApiRestAdapter(
        "https://pokeapi.test/api/v2/",
        request_timeout_s=5,
        retries=retries,
        session=RetryingSession(cfg, session=stub),  # type: ignore[arg-type]
    )


def test_list_request_uses_limit_and_offset() -> None:
    payload = {"count": 1, "next": None, "results": []}
    stub = _SessionStub([_ResponseStub(payload)])

    result = _adapter(stub).get_pokemon_list(20, 40)

    assert result == payload
    assert stub.calls[0]["url"] == "https://pokeapi.test/api/v2/pokemon/"
    assert stub.calls[0]["params"] == {"limit": 20, "offset": 40}
    assert stub.calls[0]["headers"]["Accept"] == "application/json"
    assert stub.calls[0]["timeout"] == 5


def test_detail_request_targets_keyed_endpoint() -> None:
    stub = _SessionStub([_ResponseStub({"id": 25, "name": "pikachu"})])

    result = _adapter(stub).get_pokemon_detail(25)

    assert result["name"] == "pikachu"
    assert stub.calls[0]["url"] == "https://pokeapi.test/api/v2/pokemon/25/"


def test_fetch_page_runs_blocking_call_off_loop() -> None:
    stub = _SessionStub([_ResponseStub({"count": 0, "next": None, "results": []})])

    result = asyncio.run(_adapter(stub).fetch_page(20, 0))

    assert result["count"] == 0
    assert len(stub.calls) == 1


def test_not_found_raises_client_error_with_status() -> None:
    stub = _SessionStub([_ResponseStub(ValueError("no json"), status_code=404, text="Not Found")])

    with pytest.raises(ApiClientError) as excinfo:
        _adapter(stub).get_pokemon_detail(9999)

    assert excinfo.value.status == 404
    assert excinfo.value.payload == "Not Found"
    assert "pokemon_detail[9999]" in str(excinfo.value)


def test_server_error_raises_api_server_error() -> None:
    stub = _SessionStub([_ResponseStub({"detail": "maintenance"}, status_code=503)])

    with pytest.raises(ApiServerError) as excinfo:
        _adapter(stub).get_pokemon_list(20, 0)

    assert excinfo.value.status == 503
    assert "maintenance" in str(excinfo.value)


def test_invalid_json_body_raises_api_error_without_status() -> None:
    stub = _SessionStub([_ResponseStub(ValueError("bad"), text="<html>")])

    with pytest.raises(ApiError) as excinfo:
        _adapter(stub).get_pokemon_list(20, 0)

    assert excinfo.value.status is None
    assert "invalid JSON" in str(excinfo.value)


def test_non_object_body_is_rejected() -> None:
    stub = _SessionStub([_ResponseStub(["a", "b"])])

    with pytest.raises(ApiError):
        _adapter(stub).get_pokemon_detail(1)


def test_transport_failure_is_retried_then_succeeds() -> None:
    stub = _SessionStub([req_exc.ConnectionError("refused"), _ResponseStub({"id": 1, "name": "x"})])

    result = _adapter(stub, retries=1).get_pokemon_detail(1)

    assert result["id"] == 1
    assert len(stub.calls) == 2


def test_exhausted_retries_raise_timeout_error() -> None:
    stub = _SessionStub([req_exc.Timeout("slow"), req_exc.Timeout("slow")])

    with pytest.raises(ApiTimeoutError) as excinfo:
        _adapter(stub, retries=1).get_pokemon_list(20, 0)

    assert isinstance(excinfo.value.__cause__, req_exc.Timeout)
    assert len(stub.calls) == 2


def test_invalid_paging_arguments_raise_before_request() -> None:
    stub = _SessionStub([])
    adapter = _adapter(stub)

    with pytest.raises(ValueError):
        adapter.get_pokemon_list(0, 0)
    with pytest.raises(ValueError):
        adapter.get_pokemon_list(20, -1)
    assert stub.calls == []


def test_blank_base_url_is_rejected() -> None:
    with pytest.raises(ValueError):
        PokeApiRestAdapter("  ")


def test_close_releases_session() -> None:
    stub = _SessionStub([])

    _adapter(stub).close()

    assert stub.closed is True
