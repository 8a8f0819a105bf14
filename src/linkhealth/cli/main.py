# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""LinkHealth CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, TextIO

from ..config import BatchSettings, ProbeSettings, load_batch_settings, load_probe_settings
from ..errors import BatchRejectedError
from ..log import setup_logging
from ..models import BatchReport, ProbeOptions, ProbeStatus
from ..models.probe import USER_AGENT_PROFILES
from ..runtime import LinkHealth

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_REJECTED = 2

_STATUS_MARKERS = {
    ProbeStatus.HEALTHY: "OK  ",
    ProbeStatus.REDIRECT: "3XX ",
    ProbeStatus.WARNING: "SLOW",
    ProbeStatus.BROKEN: "FAIL",
    ProbeStatus.ERROR: "ERR ",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="LinkHealth batch link checker")
    parser.add_argument("urls", nargs="*", help="URLs to check (scheme optional, https assumed)")
    parser.add_argument(
        "-f",
        "--file",
        help="Read URLs from a file, one per line ('-' for stdin, '#' starts a comment)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output JSON instead of human-friendly summary",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Per-probe timeout in seconds",
    )
    parser.add_argument(
        "--no-follow-redirects",
        action="store_true",
        help="Report 3xx responses instead of following them",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for self-signed targets)",
    )
    parser.add_argument(
        "--user-agent",
        choices=USER_AGENT_PROFILES,
        default="default",
        help="User-agent profile sent with every probe",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Probes run in parallel per window",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LINKHEALTH_LOG_LEVEL or WARNING)")
    return parser


def read_links(stream: TextIO) -> list[str]:
    links: list[str] = []
    for line in stream:
        entry = line.strip()
        if entry and not entry.startswith("#"):
            links.append(entry)
    return links


def _collect_links(args: argparse.Namespace) -> list[str]:
    links = list(args.urls)
    if args.file == "-":
        links.extend(read_links(sys.stdin))
    elif args.file:
        with open(args.file, encoding="utf-8") as handle:
            links.extend(read_links(handle))
    return links


def _build_options(args: argparse.Namespace, settings: ProbeSettings) -> ProbeOptions:
    timeout = args.timeout if args.timeout and args.timeout > 0 else settings.timeout
    return ProbeOptions(
        timeout_ms=int(timeout * 1000),
        follow_redirects=not args.no_follow_redirects,
        check_ssl=not args.ignore_ssl_errors and settings.verify_ssl,
        user_agent_profile=args.user_agent,
    )


def _print_json(data: dict[str, Any] | Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


def _pretty_print(report: BatchReport) -> None:
    for result in report.results:
        marker = _STATUS_MARKERS.get(result.status, "?   ")
        print(f"[{marker}] {result.url} {result.status_code} {result.message} ({result.response_time_ms}ms)")
        for hop in result.redirect_chain or ():
            print(f"         {hop.http_status} {hop.from_url} -> {hop.location}")
        if result.error_detail:
            print(f"         error: {result.error_detail}")

    summary = report.summary
    counts = ", ".join(f"{status.value}={summary.count(status)}" for status in ProbeStatus)
    print(f"Checked {summary.total} links: {counts}")
    print(f"Average response time: {summary.average_response_time_ms}ms")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    probe_settings = load_probe_settings()
    batch_settings = load_batch_settings()
    if args.concurrency is not None:
        batch_settings = BatchSettings(
            max_concurrency=args.concurrency,
            batch_delay=batch_settings.batch_delay,
            max_links=batch_settings.max_links,
        )

    checker = LinkHealth(probe_settings=probe_settings, batch_settings=batch_settings)
    try:
        report = checker.check(_collect_links(args), _build_options(args, probe_settings))
    except BatchRejectedError as exc:
        if args.json:
            _print_json({"error": exc.message})
        else:
            print(f"error: {exc.message}", file=sys.stderr)
        return EXIT_REJECTED

    if args.json:
        _print_json(report)
    else:
        _pretty_print(report)

    return EXIT_FAILURES if report.has_failures else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
