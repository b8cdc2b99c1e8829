# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request helpers shared by single lookups and batches."""

from __future__ import annotations

import json

import httpx

from ..errors import ResponseDecodeError
from ..models import JsonValue


def decode_json(response: httpx.Response) -> JsonValue:
    """Decode a response body as JSON, without any schema checks."""
    try:
        return response.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ResponseDecodeError(
            f"Invalid JSON in response from {response.request.url}: {exc}",
            url=str(response.request.url),
            status_code=response.status_code,
        ) from exc


def get_json(client: httpx.Client, path: str, url: str) -> JsonValue:
    """
    GET ``path?url=<url>`` and return the decoded body.

    Raises httpx.HTTPError for transport failures and non-2xx statuses, and
    ResponseDecodeError for bodies that are not JSON.
    """
    response = client.get(path, params={"url": url})
    response.raise_for_status()
    return decode_json(response)
