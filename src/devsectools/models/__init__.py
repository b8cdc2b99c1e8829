# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for the DevSecTools client."""

from .scan import (
    ERROR_KEY,
    JsonValue,
    Operation,
    ScanRequest,
    ScanResult,
    endpoint_path,
    error_result,
    is_error,
)

__all__ = [
    "ERROR_KEY",
    "JsonValue",
    "Operation",
    "ScanRequest",
    "ScanResult",
    "endpoint_path",
    "error_result",
    "is_error",
]
