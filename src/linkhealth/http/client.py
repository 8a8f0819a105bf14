# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client abstraction and factory."""

from collections.abc import Callable
from typing import Protocol

from ..config import ProbeSettings, load_probe_settings
from .models import HttpRequest, HttpResponse


class HttpClient(Protocol):
    """Minimal protocol for issuing HTTP requests."""

    def request(self, request: HttpRequest) -> HttpResponse: ...

    def close(self) -> None:  # pragma: no cover - optional for adapters
        ...


# Called once per probe with the probe's certificate-verification mode.
ClientFactory = Callable[[bool], HttpClient]


def create_default_http_client(settings: ProbeSettings | None = None, *, verify_ssl: bool | None = None) -> HttpClient:
    """Factory for the default httpx-backed client."""
    from .httpx_client import HttpxClient

    settings = settings or load_probe_settings()
    return HttpxClient(settings, verify_ssl=settings.verify_ssl if verify_ssl is None else verify_ssl)
