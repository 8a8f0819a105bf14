# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Windowed, bounded-concurrency batch scheduling."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from concurrent.futures import ThreadPoolExecutor

from ..config import BatchSettings, load_batch_settings
from ..errors import BatchTooLargeError
from ..models import ProbeOptions, ProbeRequest, ProbeResult
from ..probe.executor import ProbeExecutor

logger = logging.getLogger(__name__)


def partition(urls: Sequence[str], size: int) -> list[list[str]]:
    """Split `urls` into consecutive windows of at most `size` items."""
    size = max(1, size)
    return [list(urls[i : i + size]) for i in range(0, len(urls), size)]


class BatchScheduler:
    """
    Runs probes window by window.

    All probes of a window run in parallel and are joined before the next window
    starts; a pacing delay separates consecutive windows. Results keep input order.
    """

    def __init__(
        self,
        executor: ProbeExecutor | None = None,
        settings: BatchSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.executor = executor or ProbeExecutor()
        self.settings = settings or load_batch_settings()
        self._sleep = sleep

    def run(self, urls: Sequence[str], options: ProbeOptions | None = None) -> list[ProbeResult]:
        if len(urls) > self.settings.max_links:
            raise BatchTooLargeError(self.settings.max_links, len(urls))
        options = options or ProbeOptions()
        windows = partition(urls, self.settings.max_concurrency)
        results: list[ProbeResult] = []

        for index, window in enumerate(windows):
            if index and self.settings.batch_delay > 0:
                self._sleep(self.settings.batch_delay)
            logger.info("Probing window %d/%d (%d urls)", index + 1, len(windows), len(window))
            results.extend(self._run_window([ProbeRequest(url=url, options=options) for url in window]))

        return results

    def _run_window(self, requests: list[ProbeRequest]) -> list[ProbeResult]:
        with ThreadPoolExecutor(max_workers=len(requests), thread_name_prefix="linkhealth-probe") as pool:
            futures = [pool.submit(self.executor.run, request) for request in requests]
            # Joined in submission order so each result lands in its request's slot.
            return [self._settle(request, future) for request, future in zip(requests, futures)]

    @staticmethod
    def _settle(request: ProbeRequest, future) -> ProbeResult:
        try:
            return future.result()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Probe for %s failed unexpectedly", request.url)
            return ProbeResult.processing_error(request.url, str(exc) or type(exc).__name__)


__all__ = ["BatchScheduler", "partition"]
