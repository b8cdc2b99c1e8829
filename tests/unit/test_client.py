# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import httpx
import pytest

from devsectools.client import DevSecToolsClient
from devsectools.config import ClientSettings, Endpoint
from devsectools.errors import ResponseDecodeError
from devsectools.models import Operation


class RecordingApi:
    """MockTransport handler that records requests and answers from a table."""

    def __init__(self, responder=None):
        self.requests: list[httpx.Request] = []
        self.responder = responder or (lambda request: httpx.Response(200, json={"ok": True}))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def make_client(api: RecordingApi, **settings_kwargs) -> DevSecToolsClient:
    return DevSecToolsClient(settings=ClientSettings(**settings_kwargs), transport=api.transport)


def test_domain_returns_decoded_body():
    api = RecordingApi(lambda request: httpx.Response(200, json={"registrable_domain": "example.com"}))
    with make_client(api) as client:
        result = client.domain("example.com")

    assert result == {"registrable_domain": "example.com"}
    request = api.requests[0]
    assert request.method == "GET"
    assert str(request.url) == "https://api.devsec.tools/domain?url=example.com"
    assert request.headers["Accept"] == "application/json"
    assert request.headers["User-Agent"].startswith("devsectools-python/")


@pytest.mark.parametrize(
    ("method", "path"),
    [("domain", "/domain"), ("http", "/http"), ("tls", "/tls")],
)
def test_single_lookups_hit_their_endpoint(method, path):
    api = RecordingApi()
    with make_client(api) as client:
        getattr(client, method)("https://example.com/page?q=1")

    request = api.requests[0]
    assert request.url.path == path
    assert request.url.params["url"] == "https://example.com/page?q=1"


def test_nested_json_is_passed_through_unchanged():
    payload = {
        "url": "example.com",
        "supported": ["HTTP/1.1", "HTTP/2"],
        "details": {"alpn": None, "h3": False, "weights": [1, 2.5]},
    }
    api = RecordingApi(lambda request: httpx.Response(200, content=json.dumps(payload).encode()))
    with make_client(api) as client:
        assert client.http("example.com") == payload


def test_connection_failure_is_returned_in_band():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(RecordingApi(refuse)) as client:
        assert client.tls("example.com") == {"error": "connection refused"}


def test_timeout_is_returned_in_band():
    def stall(request):
        raise httpx.ReadTimeout("timed out", request=request)

    with make_client(RecordingApi(stall)) as client:
        assert client.domain("example.com") == {"error": "timed out"}


def test_non_success_status_is_returned_in_band():
    api = RecordingApi(lambda request: httpx.Response(500, json={"detail": "boom"}))
    with make_client(api) as client:
        result = client.http("example.com")

    assert list(result) == ["error"]
    assert "500" in result["error"]


def test_malformed_json_raises_decode_error():
    api = RecordingApi(lambda request: httpx.Response(200, content=b"<html>not json</html>"))
    with make_client(api) as client:
        with pytest.raises(ResponseDecodeError) as excinfo:
            client.domain("example.com")

    assert excinfo.value.status_code == 200
    assert excinfo.value.url == "https://api.devsec.tools/domain?url=example.com"
    assert isinstance(excinfo.value, ValueError)


def test_request_accepts_free_form_operation():
    api = RecordingApi()
    with make_client(api) as client:
        client.request("/tls/", "example.com")
        client.request(Operation.DOMAIN, "example.com")

    assert [r.url.path for r in api.requests] == ["/tls", "/domain"]


def test_timeout_is_applied_to_requests():
    api = RecordingApi()
    with make_client(api, timeout_seconds=7) as client:
        client.domain("example.com")
        client.set_timeout_seconds(0)
        client.domain("example.com")

    first, second = (r.extensions["timeout"] for r in api.requests)
    assert first["read"] == 7.0
    assert second["read"] is None


def test_set_base_url_rebuilds_transport():
    api = RecordingApi()
    with make_client(api) as client:
        client.domain("example.com")
        client.set_base_url(Endpoint.LOCALDEV)
        client.domain("example.com")

    assert str(api.requests[0].url).startswith("https://api.devsec.tools/")
    assert str(api.requests[1].url) == "http://api.devsec.local/domain?url=example.com"


def test_set_base_url_is_idempotent():
    api = RecordingApi()
    with make_client(api) as client:
        client.set_base_url("http://localhost:8080")
        once = client.settings
        client.set_base_url("http://localhost:8080")
        assert client.settings == once
        client.domain("example.com")

    assert str(api.requests[0].url) == "http://localhost:8080/domain?url=example.com"


def test_configure_keeps_omitted_values():
    api = RecordingApi()
    with make_client(api, timeout_seconds=9) as client:
        client.configure(base_url=Endpoint.LOCALDEV)
        assert client.base_url == Endpoint.LOCALDEV
        assert client.timeout_seconds == 9

        client.configure(timeout_seconds=3)
        assert client.base_url == Endpoint.LOCALDEV
        assert client.timeout_seconds == 3


def test_constructor_arguments_override_settings(monkeypatch):
    monkeypatch.setenv("DEVSECTOOLS_TIMEOUT", "11")
    api = RecordingApi()
    with DevSecToolsClient(base_url=Endpoint.LOCALDEV, transport=api.transport) as client:
        assert client.base_url == Endpoint.LOCALDEV
        assert client.timeout_seconds == 11

    with DevSecToolsClient(timeout_seconds=2, transport=api.transport) as client:
        assert client.timeout_seconds == 2


def test_settings_are_copied_not_shared():
    settings = ClientSettings()
    with DevSecToolsClient(settings=settings, transport=RecordingApi().transport) as client:
        client.set_timeout_seconds(30)
        exposed = client.settings
        exposed.base_url = "http://elsewhere"

        assert settings.timeout_seconds == 5
        assert client.base_url == Endpoint.PRODUCTION


def test_failures_are_logged_with_category(caplog):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    with make_client(RecordingApi(refuse)) as client:
        with caplog.at_level("WARNING", logger="devsectools.client"):
            client.domain("example.com")

    assert "CONNECTION_ERROR" in caplog.text
    assert "connection refused" in caplog.text


def test_redirects_are_followed():
    def handler(request):
        if request.url.path == "/domain":
            return httpx.Response(301, headers={"Location": "https://api.devsec.tools/v2/domain?url=example.com"})
        return httpx.Response(200, json={"registrable_domain": "example.com"})

    api = RecordingApi(handler)
    with make_client(api) as client:
        assert client.domain("example.com") == {"registrable_domain": "example.com"}

    assert [r.url.path for r in api.requests] == ["/domain", "/v2/domain"]


def test_redirects_can_be_disabled():
    api = RecordingApi(lambda request: httpx.Response(302, headers={"Location": "https://elsewhere.example/"}))
    with make_client(api, allow_redirects=False) as client:
        result = client.tls("example.com")

    assert "302" in result["error"]
    assert len(api.requests) == 1


def test_os_level_failure_is_returned_in_band():
    def broken(request):
        raise OSError("network unreachable")

    with make_client(RecordingApi(broken)) as client:
        assert client.http("example.com") == {"error": "network unreachable"}
