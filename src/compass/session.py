from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from functools import cached_property
from http.cookiejar import domain_match
from typing import TYPE_CHECKING, Any, Mapping, Self
from urllib.parse import urljoin, urlsplit

import requests
from requests import Session
from requests.structures import CaseInsensitiveDict

from .exceptions import (
    CompassConfigurationError,
    CompassReadError,
    CompassRequestBuildError,
    CompassTransportError,
)

if TYPE_CHECKING:  # pragma: no cover
    from requests import PreparedRequest, Response

    from .credentials import Credentials

__all__ = ["Compass", "USER_AGENT", "SESSION_COOKIE", "PATH_AUTH", "json_body"]

logger = logging.getLogger(__name__)

USER_AGENT = "compass-cli/v1"
SESSION_COOKIE = "ASP.NET_SessionId"
PATH_AUTH = "/services/admin.svc/AuthenticateUserCredentials"

_BUILD_ERRORS = (
    requests.exceptions.URLRequired,
    requests.exceptions.MissingSchema,
    requests.exceptions.InvalidSchema,
    requests.exceptions.InvalidURL,
    requests.exceptions.InvalidHeader,
    requests.exceptions.InvalidJSONError,
)


def json_body(payload: Mapping[str, Any]) -> str:
    """Serialize a request payload as compact JSON, keeping key order."""
    try:
        return json.dumps(payload, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise CompassRequestBuildError(f"Could not serialize request body: {e}") from e


@dataclass
class Compass:
    """
    Cookie-based session against a Compass portal.

    The cookie jar of the underlying `requests.Session` is the only state that
    changes after construction: it collects every `Set-Cookie` the portal sends
    and replays matching cookies on later requests. Nothing is written to disk.

    An instance is meant for one logical flow (login, then a call) and is not
    thread-safe; use one instance per thread.

    Example:
    -------
    >>> client = Compass(AppCredentials("jdoe", "secret", "school.compass.education"))
    >>> login_or_raise(client)
    >>> news_feed(client)
    b'{"d":...}'

    """

    creds: Credentials = None
    timeout: float | None = None
    _session: Session = field(init=False, default_factory=Session, repr=False)

    def __post_init__(self) -> None:
        if self.creds is None:
            raise CompassConfigurationError("Please provide credentials: `Compass(AppCredentials(...))`")
        self.creds.validate()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self._session.close()

    def create_url(self, path: str) -> str:
        """Create a full URL from a service-relative path."""
        return urljoin(self._url, path)

    @cached_property
    def _url(self) -> str:
        return "https://" + self.creds.hostname

    @cached_property
    def _cookie_host(self) -> str:
        # Same effective host http.cookiejar stores for host-only cookies
        host = urlsplit(self._url).hostname or self.creds.hostname.lower()
        return host if "." in host else host + ".local"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(for: {self.creds.username}@{self.creds.hostname})"

    def login(self) -> bool:
        """
        Perform the authentication handshake once.

        The response body is ignored: the portal answers 200 even when its
        bot-mitigation layer swallowed the attempt, so success is judged only by
        the presence of the session cookie afterwards.

        Returns True when a session cookie was set, False otherwise.
        Transport and read failures are raised, not reported as False.
        """
        body = json_body({
            "sessionstate": "readonly",
            "username": self.creds.username,
            "password": self.creds.password,
        })
        logger.debug(f"Authenticating {self.creds.username} against {self.creds.hostname}")
        self.post(PATH_AUTH, headers={"Content-Type": "application/json"}, body=body)

        if self.has_session():
            logger.debug("Session cookie received.")
            return True

        logger.info(f"Authentication request for {self.creds.username} did not set {SESSION_COOKIE}")
        return False

    def has_session(self) -> bool:
        """Whether the cookie jar holds a session cookie sent with every request to this host."""
        host = self._cookie_host
        for cookie in self._session.cookies:
            if cookie.name != SESSION_COOKIE or cookie.path not in ("", "/"):
                continue
            if domain_match(host, cookie.domain) or host == cookie.domain.lstrip(".").lower():
                return True
        return False

    def get(self, path: str) -> bytes:
        return self._request("GET", path)

    def post(self, path: str, headers: Mapping[str, str] | None = None, body: str | bytes | None = None) -> bytes:
        if isinstance(body, str):
            body = body.encode("utf-8")
        return self._request("POST", path, headers=headers, body=body)

    def _request(self, method: str, path: str, headers: Mapping[str, str] | None = None, body: bytes | None = None) -> bytes:
        prepared = self._prepare(method, path, headers, body)
        logger.debug(f"{method} {prepared.url}")

        settings = self._session.merge_environment_settings(prepared.url, {}, True, None, None)
        try:
            response = self._session.send(prepared, timeout=self.timeout, allow_redirects=True, **settings)
        except _BUILD_ERRORS as e:
            raise CompassRequestBuildError(f"Could not build {method} request for {path}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise CompassTransportError(f"{method} {prepared.url} failed: {e}") from e

        return self._read(response)

    def _prepare(self, method: str, path: str, headers: Mapping[str, str] | None, body: bytes | None) -> PreparedRequest:
        merged = CaseInsensitiveDict(headers or {})
        merged["User-Agent"] = USER_AGENT

        try:
            request = requests.Request(method, self.create_url(path), headers=merged, data=body)
            return self._session.prepare_request(request)
        except (_BUILD_ERRORS + (ValueError,)) as e:
            raise CompassRequestBuildError(f"Could not build {method} request for {path}: {e}") from e

    def _read(self, response: Response) -> bytes:
        try:
            content = response.content
        except requests.exceptions.RequestException as e:
            raise CompassReadError(f"Could not read response body from {response.url}: {e}") from e
        finally:
            response.close()

        logger.debug(f"Response {response.status_code} from {response.url} ({len(content)} bytes)")
        return content
