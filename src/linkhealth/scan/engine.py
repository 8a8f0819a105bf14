# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch engine: input policy, scheduling and summary."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..config import BatchSettings, load_batch_settings
from ..errors import BatchTooLargeError, EmptyBatchError, InvalidBatchError, NoValidUrlsError
from ..http.url import sanitize_links
from ..models import BatchReport, ProbeOptions
from .scheduler import BatchScheduler
from .summary import summarize

logger = logging.getLogger(__name__)


class ScanEngine:
    """Validates a raw batch, probes the surviving URLs and summarizes the results."""

    def __init__(self, scheduler: BatchScheduler | None = None, settings: BatchSettings | None = None):
        self.settings = settings or (scheduler.settings if scheduler else load_batch_settings())
        self.scheduler = scheduler or BatchScheduler(settings=self.settings)

    def prepare(self, links: Sequence[object] | None) -> list[str]:
        """
        Apply the batch input policy before any network activity.

        Raises InvalidBatchError, EmptyBatchError, BatchTooLargeError or NoValidUrlsError.
        """
        if links is None or isinstance(links, (str, bytes)) or not isinstance(links, Sequence):
            raise InvalidBatchError()
        if not links:
            raise EmptyBatchError()
        if len(links) > self.settings.max_links:
            logger.warning("Rejecting batch of %d links (limit %d)", len(links), self.settings.max_links)
            raise BatchTooLargeError(self.settings.max_links, len(links))

        urls = sanitize_links(links)
        if not urls:
            logger.warning("Rejecting batch: none of %d links survived validation", len(links))
            raise NoValidUrlsError()
        return urls

    def run(self, links: Sequence[object] | None, options: ProbeOptions | None = None) -> BatchReport:
        urls = self.prepare(links)
        logger.info("Checking %d urls (%d discarded)", len(urls), len(links or ()) - len(urls))
        results = self.scheduler.run(urls, options or ProbeOptions())
        return BatchReport(results=tuple(results), summary=summarize(results))


__all__ = ["ScanEngine"]
