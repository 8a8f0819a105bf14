# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Manual redirect walking.

Both the main probe and the redirect-chain tracer follow redirects through
`walk_redirects`, differing only in hop budget and per-hop timeout.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..errors import TransportError
from ..models.probe import RedirectHop
from .client import HttpClient
from .headers import header_value
from .models import Headers, HttpRequest, HttpResponse
from .url import resolve_location

logger = logging.getLogger(__name__)


@dataclass
class RedirectWalk:
    """Outcome of walking a redirect chain hop by hop."""

    start_url: str
    final_url: str
    response: HttpResponse | None = None
    hops: list[RedirectHop] = field(default_factory=list)
    exhausted: bool = False

    @property
    def failed(self) -> bool:
        return self.response is None or not self.response.ok


def walk_redirects(
    client: HttpClient,
    url: str,
    *,
    max_hops: int,
    timeout: float | None = None,
    headers: Headers | None = None,
    method: str = "HEAD",
    stop_at_budget: bool = False,
) -> RedirectWalk:
    """
    Request `url` with automatic redirects disabled and follow `Location` headers manually.

    Stops at the first response that is not a 3xx with a `Location` header, at the first
    transport failure or unresolvable `Location` (kept in `response` as a failed
    response), or once `max_hops` hops were recorded. In the last case `exhausted` is
    set and `response` is the unfollowed redirect.

    With `stop_at_budget`, no request is issued once the hop budget is spent, so the
    walk ends on the last recorded hop without inspecting its target.
    """
    walk = RedirectWalk(start_url=url, final_url=url)
    current_url = url

    while True:
        if stop_at_budget and walk.hops and len(walk.hops) >= max_hops:
            walk.exhausted = True
            break
        response = client.request(
            HttpRequest(
                url=current_url,
                method=method,
                headers=headers,
                timeout=timeout,
                allow_redirects=False,
            )
        )
        walk.response = response
        walk.final_url = current_url
        if not response.ok or not response.is_redirect:
            break

        location = header_value(response.headers, "location")
        if not location:
            break
        if len(walk.hops) >= max_hops:
            walk.exhausted = True
            break

        try:
            next_url = resolve_location(current_url, location)
        except ValueError as exc:
            logger.debug("Unusable Location %r from %s: %s", location, current_url, exc)
            walk.response = HttpResponse(
                ok=False,
                url=current_url,
                error_code=TransportError.UNKNOWN.value,
                error_message=f"Invalid redirect location {location!r}: {exc}",
                error_type=type(exc).__name__,
            )
            break
        walk.hops.append(RedirectHop(from_url=current_url, http_status=int(response.status_code or 0), location=location))
        logger.debug("Redirect %s -> %s (%s)", current_url, next_url, response.status_code)
        current_url = next_url

    return walk


__all__ = ["RedirectWalk", "walk_redirects"]
