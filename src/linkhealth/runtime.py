# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level LinkHealth facade."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .config import BatchSettings, ProbeSettings, load_batch_settings, load_probe_settings
from .errors import BatchRejectedError, InvalidBatchError, NoValidUrlsError
from .http.client import ClientFactory
from .http.url import sanitize_url, validate_url
from .models import BatchReport, ProbeOptions, ProbeResult
from .probe.executor import ProbeExecutor
from .scan.engine import ScanEngine
from .scan.scheduler import BatchScheduler

logger = logging.getLogger(__name__)


class LinkHealth:
    """
    Convenience wrapper that wires settings, probe executor, scheduler and engine.

    Settings are held per instance, so two instances with different limits can
    check batches side by side.
    """

    def __init__(
        self,
        probe_settings: ProbeSettings | None = None,
        batch_settings: BatchSettings | None = None,
        client_factory: ClientFactory | None = None,
    ):
        self.probe_settings = probe_settings or load_probe_settings()
        self.batch_settings = batch_settings or load_batch_settings()
        self.executor = ProbeExecutor(self.probe_settings, client_factory=client_factory)
        self.scheduler = BatchScheduler(self.executor, self.batch_settings)
        self.engine = ScanEngine(self.scheduler, self.batch_settings)

    def probe(self, url: str, options: ProbeOptions | None = None) -> ProbeResult:
        """Sanitize, validate and probe a single URL."""
        normalized = sanitize_url(url)
        if normalized is None or not validate_url(normalized):
            raise NoValidUrlsError()
        return self.executor.probe(normalized, options or ProbeOptions())

    def check(self, links: Sequence[object], options: ProbeOptions | None = None) -> BatchReport:
        return self.engine.run(links, options)

    def check_payload(self, payload: Any) -> tuple[int, dict[str, Any]]:
        """
        Run a batch from a decoded JSON body of the form `{"links": [...], "options": {...}}`.

        Returns `(http_status, body)`. Rejected input maps to its error's status; any other
        failure yields a generic 500 body without internal detail.
        """
        try:
            if not isinstance(payload, Mapping):
                raise InvalidBatchError()
            options = ProbeOptions.from_mapping(payload.get("options"))
            report = self.check(payload.get("links"), options)
        except BatchRejectedError as exc:
            return exc.status_code, {"error": exc.message}
        except Exception:  # noqa: BLE001
            logger.exception("Batch processing failed")
            return 500, {"error": "Internal server error", "message": "Processing failed"}
        return 200, report.to_dict()


__all__ = ["LinkHealth"]
