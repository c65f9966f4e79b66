"""``requests`` transport shared by the PokeAPI adapter.

Only transport concerns live here: default headers, the timeout policy and a
retry loop for failures where the server was never reached. Mapping HTTP
statuses to typed errors is left to the adapter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests
from requests import exceptions as req_exc

from pokedex.adapters.api_errors import ApiTimeoutError

_log = logging.getLogger(__name__)

_RETRYABLE = (req_exc.Timeout, req_exc.ConnectionError)


@dataclass
class HttpConfig:
    """Timeout and retry policy.

    ``retries`` counts extra attempts, so ``retries=2`` means at most three
    requests per call.
    """

    request_timeout_s: int = 10
    retries: int = 2
    user_agent: str = "pokedex-client"


class RetryingSession:
    """GET-only wrapper around ``requests.Session`` with transport retries."""

    def __init__(self, cfg: HttpConfig, session: Optional[requests.Session] = None) -> None:
        self.cfg = cfg
        self.session = requests.Session() if session is None else session
        self.headers = {"User-Agent": cfg.user_agent}

    def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        accept: str = "application/json",
        timeout: Optional[int] = None,
    ) -> requests.Response:
        """Issue a GET, repeating it on timeouts and connection errors.

        Any HTTP response, whatever its status, ends the loop and is returned.

        Raises:
            ApiTimeoutError: Every attempt failed before reaching the server.
                The last ``requests`` exception is chained as ``__cause__``.
        """
        headers = dict(self.headers, Accept=accept)
        wait = timeout or self.cfg.request_timeout_s
        attempts = max(0, self.cfg.retries) + 1
        attempt = 0
        while True:
            attempt += 1
            _log.debug("GET %s params=%s attempt=%d", url, params, attempt)
            try:
                return self.session.get(url, params=params, headers=headers, timeout=wait)
            except _RETRYABLE as exc:
                if attempt >= attempts:
                    _log.warning("GET %s gave up after %d attempt(s): %s", url, attempt, exc)
                    raise ApiTimeoutError(
                        f"Could not reach {url}", context=f"GET {url}"
                    ) from exc
                _log.warning("GET %s failed, retrying (%d/%d): %s", url, attempt, attempts, exc)

    def close(self) -> None:
        self.session.close()


__all__ = ["HttpConfig", "RetryingSession"]
