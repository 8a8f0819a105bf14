# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110); adapters may hand back
plain dicts with any casing, so lookups here never assume lowercase keys.
"""

from __future__ import annotations

from collections.abc import Mapping

CAPTURED_HEADERS = ("content-type", "server", "last-modified")


def header_value(headers: Mapping[str, str] | None, name: str, default: str | None = None) -> str | None:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    lower = name.lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers[key]
            return default if value is None else str(value).strip()

    for key, value in headers.items():
        if key is not None and str(key).lower() == lower:
            return default if value is None else str(value).strip()
    return default


def captured_headers(headers: Mapping[str, str] | None) -> dict[str, str | None]:
    """Extract the fixed response-header subset recorded on every probe result."""
    return {name: header_value(headers, name) for name in CAPTURED_HEADERS}


__all__ = ["CAPTURED_HEADERS", "captured_headers", "header_value"]
