# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for LinkHealth."""

from __future__ import annotations

import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("LINKHEALTH_LOG_LEVEL", "WARNING").upper()

# httpx logs every request at INFO; a batch of probes would drown the window/batch lines.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def resolve_level(level: str | int | None) -> int:
    """Map a level name or number to a logging level, falling back to WARNING."""
    if isinstance(level, int):
        return level
    name = (level or DEFAULT_LOG_LEVEL).strip().upper()
    if name.isdigit():
        return int(name)
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | int | None = None) -> None:
    """
    Configure standard logging for CLI/library use.

    Transport loggers stay at WARNING unless DEBUG is requested, so per-request
    lines only show up when probes are being debugged.
    """
    effective_level = resolve_level(level)
    logging.basicConfig(
        level=effective_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    transport_level = logging.DEBUG if effective_level <= logging.DEBUG else max(effective_level, logging.WARNING)
    for name in TRANSPORT_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)


__all__ = ["resolve_level", "setup_logging"]
