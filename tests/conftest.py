"""Shared fixtures: a scripted requests transport adapter."""

import io

import pytest
import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from gozzle.networking.client import HttpClient, status_text


class ScriptedAdapter(BaseAdapter):
    """Serve canned responses keyed by absolute URL and record traffic."""

    def __init__(self):
        super().__init__()
        self.routes = {}
        self.sent = []
        self.timeouts = []

    def add(self, url, status=200, body=b"", headers=None):
        self.routes[url] = (status, body, headers or {})

    def redirect_chain(self, base, hops, final_body=b"done"):
        """Register ``hops`` sequential 302s ending at a 200."""
        for i in range(hops):
            self.add(
                f"{base}/r{i}",
                status=302,
                headers={"Location": f"{base}/r{i + 1}"},
            )
        self.add(f"{base}/r{hops}", body=final_body)
        return f"{base}/r0"

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.sent.append(request)
        self.timeouts.append(timeout)
        status, body, headers = self.routes[request.url]

        response = requests.Response()
        response.status_code = status
        response.reason = status_text(status)
        response.headers = CaseInsensitiveDict(headers)
        response.raw = body if hasattr(body, "read") else io.BytesIO(body)
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture
def adapter():
    return ScriptedAdapter()


@pytest.fixture
def client(adapter):
    def session_factory():
        session = requests.Session()
        session.trust_env = False
        session.mount("http://", adapter)
        return session

    return HttpClient(session_factory=session_factory)
