# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for LinkHealth."""

import os
from dataclasses import dataclass

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; LinkChecker/1.0; +https://tools.allaroundworkers.com)"

USER_AGENTS: dict[str, str] = {
    "chrome": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "mobile": (
        "Mozilla/5.0 (iPhone; CPU iPhone OS 14_6 like Mac OS X) AppleWebKit/605.1.15 "
        "(KHTML, like Gecko) Version/14.0 Mobile/15E148 Safari/604.1"
    ),
    "bot": "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
    "default": DEFAULT_USER_AGENT,
}


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class ProbeSettings:
    """Per-probe defaults. Durations are seconds."""

    timeout: float = 15.0
    max_redirects: int = 10
    trace_max_hops: int = 5
    trace_timeout: float = 5.0
    slow_threshold: float = 5.0
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_env(cls) -> "ProbeSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("LINKHEALTH_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            max_redirects=max(0, _int_env("LINKHEALTH_MAX_REDIRECTS", cls.max_redirects)),
            trace_max_hops=max(0, _int_env("LINKHEALTH_TRACE_MAX_HOPS", cls.trace_max_hops)),
            trace_timeout=_float_env("LINKHEALTH_TRACE_TIMEOUT", cls.trace_timeout),
            slow_threshold=_float_env("LINKHEALTH_SLOW_THRESHOLD", cls.slow_threshold),
            verify_ssl=_bool_env("LINKHEALTH_VERIFY_SSL", cls.verify_ssl),
            user_agent=os.getenv("LINKHEALTH_USER_AGENT", cls.user_agent),
        )

    def user_agent_for(self, profile: str | None) -> str:
        """Resolve a user-agent profile name; unknown names get the default agent."""
        if profile and profile != "default" and profile in USER_AGENTS:
            return USER_AGENTS[profile]
        return self.user_agent


@dataclass
class BatchSettings:
    """Scheduler limits, passed explicitly so concurrent batches never share mutable state."""

    max_concurrency: int = 8
    batch_delay: float = 0.2
    max_links: int = 50

    def __post_init__(self) -> None:
        if self.max_concurrency <= 0:
            self.max_concurrency = 1
        if self.batch_delay < 0:
            self.batch_delay = 0.0
        if self.max_links <= 0:
            self.max_links = BatchSettings.max_links

    @classmethod
    def from_env(cls) -> "BatchSettings":
        return cls(
            max_concurrency=_int_env("LINKHEALTH_MAX_CONCURRENCY", cls.max_concurrency),
            batch_delay=_float_env("LINKHEALTH_BATCH_DELAY", cls.batch_delay),
            max_links=_int_env("LINKHEALTH_MAX_LINKS", cls.max_links),
        )


def load_probe_settings() -> ProbeSettings:
    """Load probe settings from environment with sensible defaults."""
    return ProbeSettings.from_env()


def load_batch_settings() -> BatchSettings:
    """Load batch limits from environment with sensible defaults."""
    return BatchSettings.from_env()
