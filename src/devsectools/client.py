# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level DevSecTools API client."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from contextlib import suppress
from dataclasses import replace
from typing import Any, overload

import httpx

from .batch import Outcome, settle
from .config import ClientSettings, load_client_settings
from .errors import ResponseDecodeError, categorize_exception
from .http import create_default_transport, get_json
from .models import Operation, ScanRequest, ScanResult, endpoint_path, error_result

logger = logging.getLogger(__name__)


class DevSecToolsClient:
    """
    Client for the DevSecTools scanning API (domain parsing, HTTP versions, TLS configuration).

    Every lookup returns the decoded JSON body; transport failures are reported
    in-band as ``{"error": message}`` instead of being raised.

    The httpx client is shared by all calls and rebuilt whenever the base URL or
    timeout changes. Reconfigure between bursts of traffic: a request already in
    flight keeps using the client it started on, which is closed by the rebuild.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: int | None = None,
        *,
        settings: ClientSettings | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        settings = replace(settings) if settings is not None else load_client_settings()
        if base_url is not None:
            settings.base_url = base_url
        if timeout_seconds is not None:
            settings.timeout_seconds = timeout_seconds
        self._settings = settings
        self._transport = transport
        self._http = create_default_transport(self._settings, self._transport)

    @property
    def settings(self) -> ClientSettings:
        return replace(self._settings)

    @property
    def base_url(self) -> str:
        return self._settings.base_url

    @property
    def timeout_seconds(self) -> int:
        return self._settings.timeout_seconds

    def configure(self, base_url: str | None = None, timeout_seconds: int | None = None) -> None:
        """Update base URL and/or timeout; omitted values keep their current setting."""
        if base_url is None and timeout_seconds is None:
            return
        settings = replace(self._settings)
        if base_url is not None:
            settings.base_url = base_url
        if timeout_seconds is not None:
            settings.timeout_seconds = timeout_seconds
        self._rebuild(settings)

    def set_base_url(self, base_url: str) -> None:
        self._rebuild(replace(self._settings, base_url=base_url))

    def set_timeout_seconds(self, timeout_seconds: int) -> None:
        self._rebuild(replace(self._settings, timeout_seconds=timeout_seconds))

    def _rebuild(self, settings: ClientSettings) -> None:
        previous = self._http
        self._settings = settings
        self._http = create_default_transport(settings, self._transport)
        logger.debug("Client reconfigured: base_url=%s timeout=%ss", settings.base_url, settings.timeout_seconds)
        with suppress(Exception):
            previous.close()

    def domain(self, url: str) -> ScanResult:
        """Parse the domain of `url` (registrable domain, suffix, subdomain...)."""
        return self.request(Operation.DOMAIN, url)

    def http(self, url: str) -> ScanResult:
        """Report the HTTP versions supported by `url`."""
        return self.request(Operation.HTTP, url)

    def tls(self, url: str) -> ScanResult:
        """Report the TLS versions and cipher suites supported by `url`."""
        return self.request(Operation.TLS, url)

    def request(self, operation: Operation | str, url: str) -> ScanResult:
        """Run one lookup against the endpoint named by `operation`."""
        path = endpoint_path(operation)
        logger.debug("GET %s url=%s", path, url)
        try:
            return get_json(self._http, path, url)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            return self._failure(path, url, exc)

    @overload
    def batch(self, requests: Mapping[Any, Any]) -> dict[Any, ScanResult]: ...

    @overload
    def batch(self, requests: Iterable[Any]) -> list[ScanResult]: ...

    def batch(self, requests):
        """
        Run several lookups concurrently and return their results in input order.

        `requests` is a sequence of ScanRequest (or ``{"method": ..., "url": ...}``
        mappings, or ``(operation, url)`` pairs), returning a list; or a mapping
        of caller keys to such items, returning a dict with the same keys.
        A failed lookup yields ``{"error": message}`` in its slot and does not
        affect the others.
        """
        if isinstance(requests, Mapping):
            keys = list(requests.keys())
            items = [ScanRequest.coerce(requests[key]) for key in keys]
            return dict(zip(keys, self._settle(items)))
        return self._settle([ScanRequest.coerce(item) for item in requests])

    def _settle(self, items: list[ScanRequest]) -> list[ScanResult]:
        http = self._http
        calls = [lambda item=item: get_json(http, item.path, item.url) for item in items]
        logger.debug("Dispatching batch of %d lookups", len(calls))
        outcomes: list[Outcome[Any]] = settle(calls, max_workers=self._settings.batch_max_workers)

        results: list[ScanResult] = []
        for item, outcome in zip(items, outcomes):
            if outcome.fulfilled:
                results.append(outcome.value)
            elif isinstance(outcome.error, ResponseDecodeError):
                raise outcome.error
            else:
                results.append(self._failure(item.path, item.url, outcome.error))
        return results

    def _failure(self, path: str, url: str, exc: Exception) -> ScanResult:
        category = categorize_exception(exc)
        logger.warning("Lookup %s for %s failed (%s): %s", path, url, category.value, exc)
        return error_result(str(exc))

    def close(self) -> None:
        with suppress(Exception):
            self._http.close()

    def __enter__(self) -> DevSecToolsClient:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()
