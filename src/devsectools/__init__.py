# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
DevSecTools API client package.

Thin client for the DevSecTools scanning API: domain parsing, HTTP version
support and TLS configuration lookups, individually or as a concurrent batch.
Responses are passed through as decoded JSON; transport failures come back
in-band as ``{"error": message}``.
"""

from .batch import Outcome, settle
from .client import DevSecToolsClient
from .config import ClientSettings, Endpoint, load_client_settings
from .errors import DevSecToolsError, ErrorCategory, ResponseDecodeError, categorize_exception
from .http import create_default_transport
from .log import setup_logging
from .models import Operation, ScanRequest, ScanResult, is_error
from .version import __version__

__all__ = [
    "ClientSettings",
    "DevSecToolsClient",
    "DevSecToolsError",
    "Endpoint",
    "ErrorCategory",
    "Operation",
    "Outcome",
    "ResponseDecodeError",
    "ScanRequest",
    "ScanResult",
    "categorize_exception",
    "create_default_transport",
    "is_error",
    "load_client_settings",
    "settle",
    "setup_logging",
    "__version__",
]
