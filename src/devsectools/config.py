# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for the DevSecTools client."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"devsectools-python/{__version__}"


class Endpoint:
    """Named API base addresses."""

    PRODUCTION = "https://api.devsec.tools"
    LOCALDEV = "http://api.devsec.local"


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _optional_int_env(name: str, default: int | None) -> int | None:
    try:
        value = os.getenv(name)
        if value is None:
            return default
        parsed = int(value)
        return parsed if parsed > 0 else None
    except ValueError:
        return default


@dataclass
class ClientSettings:
    """API client defaults."""

    base_url: str = Endpoint.PRODUCTION
    timeout_seconds: int = 5
    user_agent: str = DEFAULT_USER_AGENT
    verify_ssl: bool = True
    allow_redirects: bool = True
    batch_max_workers: int | None = None

    @property
    def transport_timeout(self) -> float | None:
        """Timeout handed to httpx; zero disables the client-side limit."""
        if self.timeout_seconds == 0:
            return None
        return float(self.timeout_seconds)

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        return cls(
            base_url=os.getenv("DEVSECTOOLS_BASE_URL", cls.base_url),
            timeout_seconds=_int_env("DEVSECTOOLS_TIMEOUT", cls.timeout_seconds),
            user_agent=os.getenv("DEVSECTOOLS_USER_AGENT", cls.user_agent),
            verify_ssl=_bool_env("DEVSECTOOLS_VERIFY_SSL", cls.verify_ssl),
            allow_redirects=_bool_env("DEVSECTOOLS_HTTP_REDIRECTS", cls.allow_redirects),
            batch_max_workers=_optional_int_env("DEVSECTOOLS_BATCH_MAX_WORKERS", cls.batch_max_workers),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
