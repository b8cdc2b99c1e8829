# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Lookup request/result models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]
ScanResult = dict[str, Any]

ERROR_KEY = "error"


class Operation(str, Enum):
    """Lookups exposed by the API, named after their endpoint segment."""

    DOMAIN = "domain"
    HTTP = "http"
    TLS = "tls"


def endpoint_path(operation: Operation | str) -> str:
    """Return the endpoint path for an operation, tolerating path-like input such as ``/tls/``."""
    name = operation.value if isinstance(operation, Operation) else str(operation)
    return "/" + name.strip("/")


def error_result(message: str) -> ScanResult:
    return {ERROR_KEY: message}


def is_error(result: Any) -> bool:
    """True when a lookup result carries the in-band failure marker."""
    return isinstance(result, Mapping) and ERROR_KEY in result


@dataclass(frozen=True)
class ScanRequest:
    """
    One lookup inside a batch.

    `operation` is normally an `Operation`; free strings are passed through to
    the endpoint path so callers may address endpoints this client does not name.
    """

    operation: Operation | str
    url: str

    @property
    def path(self) -> str:
        return endpoint_path(self.operation)

    @classmethod
    def coerce(cls, item: Any) -> ScanRequest:
        """
        Normalize batch input items.

        Accepts a ScanRequest, a mapping with ``method``/``operation`` and
        ``url``/``target`` keys, or an ``(operation, url)`` pair.
        """
        if isinstance(item, ScanRequest):
            return item
        if isinstance(item, Mapping):
            operation = item.get("operation", item.get("method"))
            url = item.get("url", item.get("target"))
            if operation is None or url is None:
                raise ValueError(f"Batch request mapping needs an operation and a url: {dict(item)!r}")
            return cls(operation=operation, url=str(url))
        if isinstance(item, (tuple, list)) and len(item) == 2:
            operation, url = item
            return cls(operation=operation, url=str(url))
        raise TypeError(f"Unsupported batch request item: {item!r}")
