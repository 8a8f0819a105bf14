# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single-URL probe execution."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextlib import suppress

from ..config import ProbeSettings, load_probe_settings
from ..errors import TransportError
from ..http.client import ClientFactory, HttpClient, create_default_http_client
from ..http.headers import captured_headers
from ..http.models import Headers
from ..http.redirects import RedirectWalk, walk_redirects
from ..models import ProbeOptions, ProbeRequest, ProbeResult, RedirectHop
from .classify import classify_response, classify_transport_failure
from .tracer import RedirectTracer

logger = logging.getLogger(__name__)


class ProbeExecutor:
    """
    Issues one HEAD probe per URL and classifies the outcome.

    Every probe gets its own client from `client_factory`, created with that probe's
    certificate-verification mode and closed when the probe finishes.
    """

    def __init__(
        self,
        settings: ProbeSettings | None = None,
        client_factory: ClientFactory | None = None,
        tracer: RedirectTracer | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or load_probe_settings()
        self.client_factory = client_factory or self._default_client_factory
        self.tracer = tracer or RedirectTracer(self.settings)
        self._clock = clock

    def _default_client_factory(self, verify_ssl: bool) -> HttpClient:
        return create_default_http_client(self.settings, verify_ssl=verify_ssl)

    def build_headers(self, options: ProbeOptions) -> Headers:
        return {
            "User-Agent": self.settings.user_agent_for(options.user_agent_profile),
            "Accept": "*/*",
            "Accept-Language": "en-US,en;q=0.9",
            "Cache-Control": "no-cache",
        }

    def run(self, request: ProbeRequest) -> ProbeResult:
        return self.probe(request.url, request.options)

    def probe(self, url: str, options: ProbeOptions | None = None) -> ProbeResult:
        options = options or ProbeOptions()
        headers = self.build_headers(options)
        client = self.client_factory(options.check_ssl)
        try:
            start = self._clock()
            walk = walk_redirects(
                client,
                url,
                max_hops=self.settings.max_redirects if options.follow_redirects else 0,
                timeout=options.timeout,
                headers=headers,
            )
            elapsed = self._clock() - start
            return self._build_result(client, url, options, walk, elapsed, headers)
        finally:
            with suppress(Exception):
                client.close()

    def _build_result(
        self,
        client: HttpClient,
        url: str,
        options: ProbeOptions,
        walk: RedirectWalk,
        elapsed: float,
        headers: Headers,
    ) -> ProbeResult:
        response_time_ms = max(0, int(round(elapsed * 1000)))
        response = walk.response

        if walk.failed:
            error_code = (response.error_code if response else None) or TransportError.UNKNOWN.value
            error_message = (response.error_message if response else None) or "No response"
            outcome = classify_transport_failure(error_code)
            logger.debug("Probe %s failed: %s (%s)", url, error_code, error_message)
            return ProbeResult(
                url=url,
                status=outcome.status,
                status_code=error_code,
                message=outcome.message,
                response_time_ms=response_time_ms,
                error_detail=error_message,
            )

        if walk.exhausted and options.follow_redirects:
            outcome = classify_transport_failure(TransportError.MAX_REDIRECTS.value)
            return ProbeResult(
                url=url,
                status=outcome.status,
                status_code=TransportError.MAX_REDIRECTS.value,
                message=outcome.message,
                response_time_ms=response_time_ms,
                error_detail=f"Maximum of {self.settings.max_redirects} redirects exceeded for {url}",
            )

        status_code = int(response.status_code or 0) if response else 0
        outcome = classify_response(status_code, elapsed, self.settings.slow_threshold)

        redirect_chain: tuple[RedirectHop, ...] | None = None
        if options.follow_redirects and walk.final_url != url:
            try:
                redirect_chain = self.tracer.trace(client, url, headers={"User-Agent": headers["User-Agent"]})
            except Exception as exc:  # noqa: BLE001
                logger.debug("Redirect trace for %s failed: %s", url, exc)

        ssl_valid = True if url.startswith("https:") and options.check_ssl else None
        logger.debug("Probe %s -> %s %s in %sms", url, status_code, outcome.status.value, response_time_ms)
        return ProbeResult(
            url=url,
            status=outcome.status,
            status_code=status_code,
            message=outcome.message,
            response_time_ms=response_time_ms,
            redirect_chain=redirect_chain,
            ssl_valid=ssl_valid,
            headers=captured_headers(response.headers if response else None),
        )
