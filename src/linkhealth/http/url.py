# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL sanitization and target validation."""

from __future__ import annotations

import logging
import re
import socket
from collections.abc import Iterable
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
# Substring match against the hostname, not CIDR-aware: "172." also rejects e.g. "cdn172.example.com".
BLOCKED_HOST_MARKERS = ("localhost", "127.0.0.1", "0.0.0.0", "10.", "192.168.", "172.")

_DEFAULT_PORTS = {"http": 80, "https": 443}
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"
# Hosts made only of decimal, octal or hex labels are IPv4 shorthand ("127.1", "0x7f.0.0.1", "2130706433").
_NUMERIC_HOST_RE = re.compile(r"^(?:0x[0-9a-f]*|[0-9]+)(?:\.(?:0x[0-9a-f]*|[0-9]+)){0,3}\.?$", re.IGNORECASE)


def canonical_ipv4(host: str) -> str | None:
    """
    Return the dotted-quad form of an IPv4 shorthand host, or None when `host` is not numeric.

    Raises ValueError for numeric hosts that do not fit in an IPv4 address.
    """
    if not _NUMERIC_HOST_RE.match(host):
        return None
    try:
        return socket.inet_ntoa(socket.inet_aton(host.rstrip(".")))
    except OSError as exc:
        raise ValueError(f"Invalid IPv4 host: {host}") from exc


def sanitize_url(raw: object) -> str | None:
    """
    Normalize a raw link into an absolute URL, or return None when it cannot be parsed.

    Links without an explicit http(s) prefix are assumed to be https. The result is
    stable under re-sanitization: feeding an already-normalized URL back returns it
    unchanged.
    """
    if not isinstance(raw, str):
        return None

    url = raw.strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"

    try:
        parts = urlsplit(url)
        port = parts.port
    except ValueError:
        return None

    hostname = parts.hostname
    if not parts.netloc or not hostname or any(ch.isspace() for ch in parts.netloc):
        return None

    scheme = parts.scheme.lower()
    if ":" in hostname:
        host = f"[{hostname}]"
    else:
        try:
            host = canonical_ipv4(hostname) or hostname.lower()
        except ValueError:
            return None
    netloc = host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{host}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    path = quote(parts.path or "/", safe=_PATH_SAFE)
    query = quote(parts.query, safe=_QUERY_SAFE)
    fragment = quote(parts.fragment, safe=_QUERY_SAFE)
    return urlunsplit((scheme, netloc, path, query, fragment))


def validate_url(url: str) -> bool:
    """Return True when the URL uses an allowed scheme and does not target a blocked host."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False

    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        return False

    hostname = (parts.hostname or "").lower()
    if not hostname:
        return False
    try:
        hostname = canonical_ipv4(hostname) or hostname
    except ValueError:
        return False
    return not any(marker in hostname for marker in BLOCKED_HOST_MARKERS)


def sanitize_links(links: Iterable[object]) -> list[str]:
    """Sanitize and validate a batch of raw links, keeping input order and dropping rejects."""
    accepted: list[str] = []
    for raw in links:
        url = sanitize_url(raw)
        if url is None or not validate_url(url):
            logger.info("Discarding link %r", raw)
            continue
        accepted.append(url)
    return accepted


def resolve_location(base_url: str, location: str) -> str:
    """Resolve a Location header (absolute or relative) against the URL that returned it."""
    return urljoin(base_url, location.strip())


__all__ = [
    "ALLOWED_SCHEMES",
    "BLOCKED_HOST_MARKERS",
    "canonical_ipv4",
    "resolve_location",
    "sanitize_links",
    "sanitize_url",
    "validate_url",
]
