# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Batch scanning exports."""

from .engine import ScanEngine
from .scheduler import BatchScheduler, partition
from .summary import summarize

__all__ = ["BatchScheduler", "ScanEngine", "partition", "summarize"]
