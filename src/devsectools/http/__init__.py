# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

from .client import DEFAULT_HEADERS, create_default_transport
from .send import decode_json, get_json

__all__ = [
    "DEFAULT_HEADERS",
    "create_default_transport",
    "decode_json",
    "get_json",
]
