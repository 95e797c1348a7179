"""Test configuration ensuring local package takes precedence over installed copies."""
from __future__ import annotations

import sys
import threading
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
PROJECT_STR = str(PROJECT_ROOT)
if PROJECT_STR not in sys.path:
    sys.path.insert(0, PROJECT_STR)

import requests  # noqa: E402

from hub_scanner import constants  # noqa: E402
from hub_scanner.api import HubClient  # noqa: E402
from hub_scanner.store import MemoryStore  # noqa: E402
from hub_scanner.tokens import TokenRotator  # noqa: E402


class FakeResponse:
    def __init__(self, status_code=200, body=b""):
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.status_code = status_code
        self._body = body
        self.closed = False

    def iter_content(self, chunk_size=8192):
        for i in range(0, len(self._body), chunk_size):
            yield self._body[i:i + chunk_size]

    def close(self):
        self.closed = True


class FakeSession:
    """Routes requests by exact URL.

    A route value may be a ``FakeResponse``, a list of them (served in
    order, the last one repeating), an exception instance to raise, or a
    callable taking the headers dict.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []
        self._lock = threading.Lock()

    def request(self, method, url, headers=None, json=None, stream=False, timeout=None):
        with self._lock:
            self.calls.append({"method": method, "url": url, "headers": dict(headers or {})})
            route = self.routes.get(url)
            if isinstance(route, list):
                route = route.pop(0) if len(route) > 1 else route[0]
        if route is None:
            return FakeResponse(404, b"not found")
        if isinstance(route, BaseException):
            raise route
        if callable(route):
            return route(headers or {})
        return route

    def urls(self):
        with self._lock:
            return [c["url"] for c in self.calls]

    def close(self):
        pass


@pytest.fixture(autouse=True)
def isolated_paths(monkeypatch, tmp_path):
    monkeypatch.setattr(constants, "LOG_FILE", str(tmp_path / "logs" / "hubscan.log"))
    monkeypatch.setattr(constants, "CONFIG_DIR", str(tmp_path / "cfg"))
    monkeypatch.delenv(constants.TOKENS_ENV_VAR, raising=False)
    return tmp_path


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def client(session, sleeps):
    rotator = TokenRotator(["tok_a", "tok_b", "tok_c"])
    return HubClient(rotator=rotator, base_url="https://hub.test", session=session,
                     sleep=sleeps.append, max_retries=5)


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def transport_error():
    return requests.ConnectionError("connection refused")
