import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from gozzle.networking.client import HttpClient
from gozzle.networking.config import RequestConfig
from gozzle.networking.errors import (
    RequestConstructionError,
    TooManyRedirectsError,
    TransportError,
)


class _Handler(BaseHTTPRequestHandler):
    hits: list[str] = []

    def do_GET(self):
        self.hits.append(self.path)
        if self.path == "/missing":
            self._reply(404, b"nothing here")
        elif self.path.startswith("/hop/"):
            remaining = int(self.path.rsplit("/", 1)[1])
            if remaining == 0:
                self._reply(200, b"landed")
                return
            self.send_response(302)
            self.send_header("Location", f"/hop/{remaining - 1}")
            self.send_header("Content-Length", "0")
            self.end_headers()
        else:
            self._reply(200, json.dumps(dict(self.headers)).encode("utf-8"))

    def do_POST(self):
        self.hits.append(self.path)
        length = int(self.headers.get("Content-Length", 0))
        self._reply(201, self.rfile.read(length))

    def _reply(self, status, body):
        self.send_response(status)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


def _local_session():
    session = requests.Session()
    session.trust_env = False
    return session


@pytest.fixture
def server():
    _Handler.hits = []
    httpd = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{httpd.server_address[1]}"
    httpd.shutdown()
    httpd.server_close()
    thread.join()


@pytest.fixture
def live_client():
    return HttpClient(session_factory=_local_session)


def test_get_404(server, live_client):
    result = live_client.send(RequestConfig(method="get", url=f"{server}/missing"))

    assert result.ok
    assert result.value.status_code == 404
    assert result.value.status_text == "Not Found"
    assert result.value.raw_body == b"nothing here"


def test_default_headers_reach_server(server, live_client):
    result = live_client.send(
        RequestConfig(url=f"{server}/echo", headers={"Accept": "text/plain"})
    )

    received = json.loads(result.value.raw_body)
    assert received["Accept"] == "text/plain"
    assert received["User-Agent"] == "gozzle-client-v1.0"


def test_post_body_round_trip(server, live_client):
    result = live_client.send(RequestConfig(method="post", url=f"{server}/items", body={"a": 1}))

    assert result.ok
    assert result.value.status_code == 201
    assert json.loads(result.value.raw_body) == {"a": 1}


def test_redirect_chain_within_cap(server, live_client):
    result = live_client.send(RequestConfig(url=f"{server}/hop/5"))

    assert result.ok
    assert result.value.raw_body == b"landed"
    assert result.meta["redirects"] == 5


def test_redirect_chain_past_cap(server, live_client):
    result = live_client.send(RequestConfig(url=f"{server}/hop/6"))

    assert not result.ok
    assert isinstance(result.error, TooManyRedirectsError)
    assert len(_Handler.hits) == 6


@pytest.mark.parametrize(
    "overrides",
    [
        {"headers": {"X-A": "a\r\nInjected: 1"}},
        {"headers": {"X-A": "€"}},
        {"bearer_token": "tok\n"},
        {"method": "get\n"},
    ],
)
def test_invalid_input_returns_err_without_reaching_server(server, live_client, overrides):
    result = live_client.send(RequestConfig(url=f"{server}/echo", **overrides))

    assert not result.ok
    assert isinstance(result.error, RequestConstructionError)
    assert _Handler.hits == []


def test_connection_refused_is_transport_error(live_client):
    result = live_client.send(RequestConfig(url="http://127.0.0.1:9/", timeout_seconds=2))

    assert not result.ok
    assert type(result.error) is TransportError
