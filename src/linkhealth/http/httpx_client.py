# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging

import httpx

from ..config import ProbeSettings, load_probe_settings
from ..errors import classify_transport_error
from .client import HttpClient
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """
    Synchronous httpx client wrapper.

    Each instance owns its own connection pool and TLS verification mode, so
    probes with different `checkSSL` settings never share one.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client: httpx.Client | None = None,
        *,
        verify_ssl: bool | None = None,
    ):
        self.settings = settings or load_probe_settings()
        self.verify_ssl = self.settings.verify_ssl if verify_ssl is None else verify_ssl
        self._client = client or httpx.Client(
            follow_redirects=False,
            timeout=self.settings.timeout,
            verify=self.verify_ssl,
        )

    def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        try:
            resp = self._client.request(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
            )
            return HttpResponse(
                ok=True,
                status_code=resp.status_code,
                headers={key.lower(): value for key, value in resp.headers.items()},
                url=str(resp.url),
                meta={"http_version": resp.http_version},
            )
        except Exception as exc:  # noqa: BLE001
            code = classify_transport_error(exc)
            logger.debug("%s %s failed: %s (%s)", request.method, request.url, type(exc).__name__, code.value)
            return HttpResponse(
                ok=False,
                url=request.url,
                error_code=code.value,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
            )

    def close(self) -> None:
        self._client.close()
