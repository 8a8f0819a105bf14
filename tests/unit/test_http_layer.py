# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

import httpx

from linkhealth.config import ProbeSettings
from linkhealth.http.adapters import StubHttpClient
from linkhealth.http.client import create_default_http_client
from linkhealth.http.headers import captured_headers, header_value
from linkhealth.http.httpx_client import HttpxClient
from linkhealth.http.models import HttpRequest, HttpResponse
from linkhealth.http.redirects import walk_redirects
from linkhealth.models import RedirectHop


def _mock_client(handler, **settings_kwargs) -> HttpxClient:
    settings = ProbeSettings(**settings_kwargs)
    return HttpxClient(settings, client=httpx.Client(transport=httpx.MockTransport(handler)))


def _redirect(location: str, status: int = 301) -> HttpResponse:
    return HttpResponse(ok=True, status_code=status, headers={"Location": location})


def test_httpx_client_sends_head_with_default_user_agent():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, headers={"Content-Type": "text/html", "Server": "nginx"})

    client = _mock_client(handler, user_agent="Probe/1.0")
    response = client.request(HttpRequest(url="https://example.com/", headers={"Accept": "*/*"}))

    assert response.ok is True
    assert response.status_code == 200
    assert response.headers["content-type"] == "text/html"
    assert response.url == "https://example.com/"
    assert seen[0].method == "HEAD"
    assert seen[0].headers["User-Agent"] == "Probe/1.0"
    assert seen[0].headers["Accept"] == "*/*"


def test_httpx_client_keeps_explicit_user_agent():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.headers["User-Agent"])
        return httpx.Response(204)

    client = _mock_client(handler)
    client.request(HttpRequest(url="https://example.com/", headers={"User-Agent": "Googlebot"}))
    assert seen == ["Googlebot"]


def test_httpx_client_does_not_follow_redirects_by_default():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/old":
            return httpx.Response(301, headers={"Location": "/new"})
        return httpx.Response(200)

    client = _mock_client(handler)
    response = client.request(HttpRequest(url="https://example.com/old"))
    assert response.status_code == 301
    assert response.is_redirect
    assert response.headers["location"] == "/new"


def test_httpx_client_converts_transport_errors():
    def handler(request: httpx.Request) -> httpx.Response:
        try:
            raise socket.gaierror(-2, "Name or service not known")
        except socket.gaierror as exc:
            raise httpx.ConnectError("connect failed", request=request) from exc

    client = _mock_client(handler)
    response = client.request(HttpRequest(url="https://missing.example/"))

    assert response.ok is False
    assert response.status_code is None
    assert response.error_code == "ENOTFOUND"
    assert response.error_type == "ConnectError"
    assert response.error_message == "connect failed"


def test_httpx_client_reports_timeouts():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    response = _mock_client(handler).request(HttpRequest(url="https://slow.example/", timeout=0.1))
    assert response.error_code == "ETIMEDOUT"


def test_create_default_http_client_honors_verify_override():
    settings = ProbeSettings(verify_ssl=True)
    client = create_default_http_client(settings, verify_ssl=False)
    try:
        assert isinstance(client, HttpxClient)
        assert client.verify_ssl is False
    finally:
        client.close()


def test_stub_http_client_records_requests_and_supports_callables():
    stub = StubHttpClient({"https://a.example/": HttpResponse(ok=True, status_code=200)})
    stub.add("https://b.example/", lambda request: HttpResponse(ok=True, status_code=204, url=request.url))

    assert stub.request(HttpRequest(url="https://a.example/")).status_code == 200
    assert stub.request(HttpRequest(url="https://b.example/")).url == "https://b.example/"
    missing = stub.request(HttpRequest(url="https://c.example/"))
    assert missing.ok is False
    assert missing.error_code == "ERROR"
    assert [r.url for r in stub.requests] == ["https://a.example/", "https://b.example/", "https://c.example/"]
    assert stub.factory(False) is stub


def test_header_value_is_case_insensitive():
    headers = {"Content-Type": "text/plain ", "X-Mixed-CASE": "1"}
    assert header_value(headers, "content-type") == "text/plain"
    assert header_value(headers, "x-mixed-case") == "1"
    assert header_value(headers, "missing") is None
    assert header_value(None, "server", "n/a") == "n/a"


def test_captured_headers_subset():
    captured = captured_headers({"server": "nginx", "content-type": "text/html", "set-cookie": "a=b"})
    assert captured == {"content-type": "text/html", "server": "nginx", "last-modified": None}


def test_walk_redirects_records_hops_and_final_response():
    stub = StubHttpClient(
        {
            "https://a.example/": _redirect("https://b.example/"),
            "https://b.example/": _redirect("/landing", status=302),
            "https://b.example/landing": HttpResponse(ok=True, status_code=200),
        }
    )

    walk = walk_redirects(stub, "https://a.example/", max_hops=10, timeout=2.0, headers={"User-Agent": "UA"})

    assert walk.hops == [
        RedirectHop(from_url="https://a.example/", http_status=301, location="https://b.example/"),
        RedirectHop(from_url="https://b.example/", http_status=302, location="/landing"),
    ]
    assert walk.final_url == "https://b.example/landing"
    assert walk.response.status_code == 200
    assert walk.exhausted is False
    assert walk.failed is False
    assert all(r.allow_redirects is False and r.timeout == 2.0 and r.method == "HEAD" for r in stub.requests)


def test_walk_redirects_zero_budget_returns_redirect_response():
    stub = StubHttpClient({"https://a.example/": _redirect("https://b.example/")})
    walk = walk_redirects(stub, "https://a.example/", max_hops=0)
    assert walk.hops == []
    assert walk.exhausted is True
    assert walk.response.status_code == 301
    assert len(stub.requests) == 1


def test_walk_redirects_detects_loops_by_budget():
    stub = StubHttpClient(
        {
            "https://a.example/": _redirect("https://b.example/"),
            "https://b.example/": _redirect("https://a.example/"),
        }
    )
    walk = walk_redirects(stub, "https://a.example/", max_hops=3)
    assert len(walk.hops) == 3
    assert walk.exhausted is True
    assert len(stub.requests) == 4


def test_walk_redirects_stop_at_budget_skips_extra_request():
    stub = StubHttpClient(
        {
            "https://a.example/": _redirect("https://b.example/"),
            "https://b.example/": _redirect("https://a.example/"),
        }
    )
    walk = walk_redirects(stub, "https://a.example/", max_hops=3, stop_at_budget=True)
    assert len(walk.hops) == 3
    assert walk.exhausted is True
    assert len(stub.requests) == 3


def test_walk_redirects_stops_on_missing_location_or_failure():
    no_location = StubHttpClient({"https://a.example/": HttpResponse(ok=True, status_code=302)})
    walk = walk_redirects(no_location, "https://a.example/", max_hops=5)
    assert walk.hops == []
    assert walk.response.status_code == 302

    failing = StubHttpClient({"https://a.example/": _redirect("https://gone.example/")})
    walk = walk_redirects(failing, "https://a.example/", max_hops=5)
    assert len(walk.hops) == 1
    assert walk.failed is True
    assert walk.final_url == "https://gone.example/"


def test_walk_redirects_ends_with_failure_on_unresolvable_location():
    stub = StubHttpClient({"https://a.example/": _redirect("http://[::1", status=302)})
    walk = walk_redirects(stub, "https://a.example/", max_hops=5)
    assert walk.failed is True
    assert walk.hops == []
    assert walk.response.error_code == "ERROR"
    assert walk.response.error_type == "ValueError"
    assert walk.final_url == "https://a.example/"
