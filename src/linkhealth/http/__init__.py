# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import StubHttpClient
from .client import ClientFactory, HttpClient, create_default_http_client
from .headers import CAPTURED_HEADERS, captured_headers, header_value
from .httpx_client import HttpxClient
from .models import Headers, HttpRequest, HttpResponse
from .redirects import RedirectWalk, walk_redirects
from .url import resolve_location, sanitize_links, sanitize_url, validate_url

__all__ = [
    "CAPTURED_HEADERS",
    "ClientFactory",
    "Headers",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "RedirectWalk",
    "StubHttpClient",
    "captured_headers",
    "create_default_http_client",
    "header_value",
    "resolve_location",
    "sanitize_links",
    "sanitize_url",
    "validate_url",
    "walk_redirects",
]
