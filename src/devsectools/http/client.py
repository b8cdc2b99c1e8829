# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx client factory."""

from __future__ import annotations

import httpx

from ..config import ClientSettings, load_client_settings

DEFAULT_HEADERS = {"Accept": "application/json"}


def create_default_transport(
    settings: ClientSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """
    Build a fresh httpx.Client bound to the configured base URL and timeout.

    `transport` replaces httpx's network transport (e.g. `httpx.MockTransport`)
    without changing anything else about the client.
    """
    settings = settings or load_client_settings()
    headers = dict(DEFAULT_HEADERS)
    headers["User-Agent"] = settings.user_agent
    return httpx.Client(
        base_url=settings.base_url,
        timeout=settings.transport_timeout,
        verify=settings.verify_ssl,
        follow_redirects=settings.allow_redirects,
        headers=headers,
        transport=transport,
    )
