"""Pytest configuration and fixtures for compass client tests."""

import io
import logging
from http.client import HTTPMessage
from urllib.parse import urlsplit

import pytest
from requests.adapters import HTTPAdapter
from urllib3 import HTTPResponse

from compass import AppCredentials, Compass
from compass.logger import CompassHandler
from compass.session import PATH_AUTH

HOST = "portal.example.com"
SESSION_SET_COOKIE = ("Set-Cookie", "ASP.NET_SessionId=abc; path=/; HttpOnly")


class BrokenBody(io.RawIOBase):
    """Response body whose connection drops while it is being read."""

    def readable(self):
        return True

    def read(self, size=-1):
        raise OSError("connection reset by peer")


class OriginalResponse:
    """Stands in for the http.client response urllib3 normally wraps."""

    def __init__(self, headers):
        self.msg = HTTPMessage()
        for name, value in headers:
            self.msg.add_header(name, value)
        self.closed = False

    def close(self):
        self.closed = True

    def isclosed(self):
        return self.closed


class FakeAdapter(HTTPAdapter):
    """Transport adapter that answers from a script instead of the network.

    Responses are queued per (method, path-with-query). The last queued response
    for a route is repeated once the others are used up. Every prepared request
    that reaches the adapter is recorded in `requests`.
    """

    def __init__(self):
        super().__init__()
        self.requests = []
        self._routes = {}

    def add(self, method, path, body=b"", status=200, headers=None):
        self._routes.setdefault((method, path), []).append((status, list(headers or []), body))

    def add_error(self, method, path, error):
        self._routes.setdefault((method, path), []).append(error)

    def calls(self, method, path):
        return [r for r in self.requests if r.method == method and _path_of(r.url) == path]

    def send(self, request, **kwargs):
        self.requests.append(request)

        queue = self._routes.get((request.method, _path_of(request.url)))
        if not queue:
            item = (404, [], b"")
        elif len(queue) > 1:
            item = queue.pop(0)
        else:
            item = queue[0]

        if isinstance(item, Exception):
            raise item

        status, headers, body = item
        raw = HTTPResponse(
            body=body if hasattr(body, "read") else io.BytesIO(body),
            headers=headers,
            status=status,
            preload_content=False,
            decode_content=False,
            original_response=OriginalResponse(headers),
        )
        return self.build_response(request, raw)


def _path_of(url):
    parts = urlsplit(url)
    return parts.path + ("?" + parts.query if parts.query else "")


@pytest.fixture(autouse=True)
def reset_compass_logger():
    """Undo handlers installed by setup_logger during a test."""
    yield
    logger = logging.getLogger("compass")
    for handler in [h for h in logger.handlers if isinstance(h, CompassHandler)]:
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def creds() -> AppCredentials:
    return AppCredentials("jdoe", "secret", HOST)


@pytest.fixture
def client(creds, adapter) -> Compass:
    compass = Compass(creds)
    compass._session.mount("https://", adapter)
    yield compass
    compass.close()


@pytest.fixture
def logged_in(client, adapter) -> Compass:
    """Client whose session cookie was set by a scripted login."""
    adapter.add("POST", PATH_AUTH, b'{"d":null}', headers=[SESSION_SET_COOKIE])
    assert client.login()
    return client
