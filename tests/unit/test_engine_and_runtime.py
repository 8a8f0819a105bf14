# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from linkhealth.config import BatchSettings, ProbeSettings
from linkhealth.errors import BatchTooLargeError, EmptyBatchError, InvalidBatchError, NoValidUrlsError
from linkhealth.http.adapters import StubHttpClient
from linkhealth.http.models import HttpResponse
from linkhealth.models import ProbeOptions, ProbeStatus
from linkhealth.probe.executor import ProbeExecutor
from linkhealth.runtime import LinkHealth
from linkhealth.scan.engine import ScanEngine
from linkhealth.scan.scheduler import BatchScheduler


class CountingScheduler(BatchScheduler):
    def __init__(self, stub, settings):
        super().__init__(ProbeExecutor(ProbeSettings(), client_factory=stub.factory), settings, sleep=lambda _: None)
        self.calls = 0

    def run(self, urls, options=None):
        self.calls += 1
        return super().run(urls, options)


def _engine(responses=None, **batch_kwargs):
    stub = StubHttpClient(responses or {})
    scheduler = CountingScheduler(stub, BatchSettings(**batch_kwargs))
    return ScanEngine(scheduler), scheduler, stub


def test_single_bare_domain_is_healthy():
    engine, _, stub = _engine({"https://example.com/": HttpResponse(ok=True, status_code=200)})

    report = engine.run(["example.com"])

    assert len(report.results) == 1
    result = report.results[0]
    assert result.url == "https://example.com/"
    assert (result.status, result.status_code, result.message) == (ProbeStatus.HEALTHY, 200, "OK")
    assert stub.requests[0].url == "https://example.com/"
    assert report.summary.total == 1


def test_private_only_batch_is_rejected_without_network():
    engine, scheduler, stub = _engine()
    with pytest.raises(NoValidUrlsError):
        engine.run(["http://10.0.0.5/"])
    assert scheduler.calls == 0
    assert stub.requests == []


def test_oversized_batch_rejected_regardless_of_validity():
    engine, scheduler, stub = _engine()
    links = ["http://10.0.0.5/"] * 30 + [f"site{i}.example" for i in range(30)]
    with pytest.raises(BatchTooLargeError) as excinfo:
        engine.run(links)
    assert excinfo.value.size == 60
    assert scheduler.calls == 0
    assert stub.requests == []


@pytest.mark.parametrize(("links", "error"), [(None, InvalidBatchError), ("example.com", InvalidBatchError), ({"a": 1}, InvalidBatchError), ([], EmptyBatchError)])
def test_malformed_batches(links, error):
    engine, _, _ = _engine()
    with pytest.raises(error):
        engine.run(links)


def test_invalid_entries_are_dropped_and_order_kept():
    responses = {
        "https://b.example/": HttpResponse(ok=True, status_code=404),
        "https://a.example/": HttpResponse(ok=True, status_code=200),
    }
    engine, _, _ = _engine(responses, max_concurrency=1)
    report = engine.run(["b.example", "localhost:3000", "a.example", 12])
    assert [r.url for r in report.results] == ["https://b.example/", "https://a.example/"]
    assert [r.status for r in report.results] == [ProbeStatus.BROKEN, ProbeStatus.HEALTHY]
    assert sum(report.summary.counts_by_status.values()) == report.summary.total == 2


def test_redirect_scenario_reports_final_classification_and_hop():
    responses = {
        "https://short.example/x": HttpResponse(ok=True, status_code=301, headers={"location": "https://long.example/article"}),
        "https://long.example/article": HttpResponse(ok=True, status_code=200),
    }
    engine, _, _ = _engine(responses)
    result = engine.run(["https://short.example/x"], ProbeOptions(follow_redirects=True)).results[0]
    assert result.status == ProbeStatus.HEALTHY
    assert len(result.redirect_chain) == 1
    assert result.redirect_chain[0].http_status == 301


def _runtime(responses):
    stub = StubHttpClient(responses)
    return LinkHealth(ProbeSettings(), BatchSettings(batch_delay=0), client_factory=stub.factory), stub


def test_runtime_probe_sanitizes_and_validates():
    checker, stub = _runtime({"https://example.com/": HttpResponse(ok=True, status_code=200)})
    assert checker.probe("example.com").status == ProbeStatus.HEALTHY
    with pytest.raises(NoValidUrlsError):
        checker.probe("http://127.0.0.1/")
    assert len(stub.requests) == 1


def test_check_payload_success_shape():
    checker, stub = _runtime({"https://example.com/": HttpResponse(ok=True, status_code=200)})
    status, body = checker.check_payload({"links": ["example.com"], "options": {"timeout": 2000, "userAgent": "bot"}})

    assert status == 200
    assert body["processed"] == 1
    assert body["results"][0]["status"] == "healthy"
    assert body["summary"]["healthy"] == 1
    assert stub.requests[0].timeout == 2.0
    assert "Googlebot" in stub.requests[0].headers["User-Agent"]


@pytest.mark.parametrize(
    ("payload", "expected_status", "expected_error"),
    [
        ("not a mapping", 400, "Invalid links array"),
        ({"links": []}, 400, "Invalid links array"),
        ({"links": "example.com"}, 400, "Invalid links array"),
        ({"links": [f"s{i}.example" for i in range(51)]}, 429, "Maximum 50 links per request"),
        ({"links": ["localhost:8080", "http://192.168.0.1/", "   "]}, 400, "No valid URLs provided"),
    ],
)
def test_check_payload_rejections(payload, expected_status, expected_error):
    checker, stub = _runtime({})
    status, body = checker.check_payload(payload)
    assert status == expected_status
    assert body == {"error": expected_error}
    assert stub.requests == []


def test_check_payload_hides_internal_failures(monkeypatch):
    checker, _ = _runtime({})

    def explode(*_args, **_kwargs):
        raise RuntimeError("secret internals")

    monkeypatch.setattr(checker.engine, "run", explode)
    status, body = checker.check_payload({"links": ["example.com"]})
    assert status == 500
    assert body == {"error": "Internal server error", "message": "Processing failed"}


def test_probe_options_from_mapping():
    assert ProbeOptions.from_mapping(None) == ProbeOptions()
    options = ProbeOptions.from_mapping({"timeout": 5000, "followRedirects": False, "checkSSL": False, "userAgent": "chrome"})
    assert options == ProbeOptions(timeout_ms=5000, follow_redirects=False, check_ssl=False, user_agent_profile="chrome")
    loose = ProbeOptions.from_mapping({"timeout": "fast", "followRedirects": 0, "userAgent": "lynx"})
    assert loose.timeout_ms == 15000
    assert loose.follow_redirects is True
    assert loose.user_agent_profile == "default"
    assert ProbeOptions(timeout_ms=-5).timeout_ms == 15000
