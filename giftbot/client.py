"""HTTP client carrying a per-account session cookie, fixed headers, pacing and retries."""

from __future__ import annotations

import itertools
import logging
import random
import threading
import time
from collections.abc import Mapping
from urllib.parse import urlencode, urljoin, urlsplit

import requests

BASE_URL = "https://www.steamgifts.com"

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

DEFAULT_JITTER = (3.0, 8.0)
DEFAULT_TIMEOUT = 30.0
MAX_RETRIES = 3

_RETRYABLE_STATUSES = frozenset({429, 502, 503, 504})
_SNIPPET_LIMIT = 200


class Cancelled(Exception):
    """Raised when a request is abandoned because its cancel event was set."""

    def __init__(self, message: str = "context canceled") -> None:
        super().__init__(message)


class HTTPError(Exception):
    """A response with a status of 400 or above."""

    def __init__(self, status: int, url: str, body: str, content: bytes = b"") -> None:
        super().__init__(f"http {status} from {url}: {body}")
        self.status = status
        self.url = url
        self.body = body
        self.content = content


def snippet(data: bytes) -> str:
    """Shorten a response body for use in error messages."""
    if len(data) > _SNIPPET_LIMIT:
        return data[:_SNIPPET_LIMIT].decode("utf-8", "replace") + "…"
    return data.decode("utf-8", "replace")


def _pause(seconds: float, cancel: threading.Event | None) -> None:
    if cancel is not None:
        if cancel.is_set():
            raise Cancelled()
        if seconds > 0 and cancel.wait(seconds):
            raise Cancelled()
    elif seconds > 0:
        time.sleep(seconds)


class Client:
    """Per-account HTTP client.

    ``limiter`` is a ``(min_seconds, max_seconds)`` window; a random delay
    from it is waited before every request. ``cancel`` arguments are
    :class:`threading.Event` objects that abort pending waits when set.
    """

    backoff_base = 5.0
    max_retries = MAX_RETRIES

    def __init__(
        self,
        cookie: str,
        user_agent: str = "",
        *,
        base_url: str = BASE_URL,
        logger: logging.Logger | None = None,
        limiter: tuple[float, float] = DEFAULT_JITTER,
        timeout: float = DEFAULT_TIMEOUT,
        proxy: str = "",
    ) -> None:
        if not cookie or not cookie.strip():
            raise ValueError("client: cookie is required")
        self._base_url = base_url
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self.timeout = timeout
        self._log = logger or logging.getLogger(__name__)
        low, high = limiter
        self._jitter = (max(0.0, low), max(0.0, low, high))
        self.proxy = proxy
        self._proxies: dict[str, str] = {}
        if proxy:
            try:
                parsed = urlsplit(proxy)
                parsed.port  # validates the port component
            except ValueError as exc:
                raise ValueError(f"client: invalid proxy URL {proxy!r}: {exc}") from exc
            self._proxies = {"http": proxy, "https": proxy}
        self._session = requests.Session()
        try:
            host = urlsplit(base_url).hostname or ""
        except ValueError as exc:
            raise ValueError(f"client: parse base url: {exc}") from exc
        self._session.cookies.set("PHPSESSID", cookie, domain=host, path="/")

    @property
    def base_url(self) -> str:
        """The configured host."""
        return self._base_url

    def get(self, path: str, cancel: threading.Event | None = None) -> bytes:
        """Fetch an absolute URL or a path relative to the base URL."""
        return self._request("GET", path, None, {}, cancel)

    def post_form(
        self,
        path: str,
        form: Mapping[str, object],
        cancel: threading.Event | None = None,
    ) -> bytes:
        """Submit an application/x-www-form-urlencoded request."""
        body = urlencode(sorted(form.items()), doseq=True)
        headers = {
            "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
            "X-Requested-With": "XMLHttpRequest",
            "Accept": "application/json, text/javascript, */*; q=0.01",
        }
        return self._request("POST", path, body, headers, cancel)

    def _resolve(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return urljoin(self._base_url, path)

    def _backoff(self, attempt: int, cancel: threading.Event | None) -> None:
        _pause(self.backoff_base * (1 << attempt), cancel)

    def _request(
        self,
        method: str,
        path: str,
        data: str | None,
        extra_headers: dict[str, str],
        cancel: threading.Event | None,
    ) -> bytes:
        target = self._resolve(path)
        headers = {
            "User-Agent": self.user_agent,
            "Accept-Language": "en-US,en;q=0.9",
            "Referer": self._base_url + "/",
            **extra_headers,
        }
        for attempt in itertools.count():
            final = attempt >= self.max_retries
            _pause(random.uniform(*self._jitter), cancel)
            self._log.debug("http request method=%s url=%s attempt=%d", method, target, attempt + 1)
            try:
                response = self._session.request(
                    method,
                    target,
                    data=data,
                    headers=headers,
                    timeout=self.timeout,
                    proxies=self._proxies or None,
                )
            except requests.RequestException as exc:
                if not final:
                    self._log.warning("transient error, retrying err=%s attempt=%d", exc, attempt + 1)
                    self._backoff(attempt, cancel)
                    continue
                raise ConnectionError(f"client: {method} {target}: {exc}") from exc

            content = response.content
            status = response.status_code
            self._log.debug("http response status=%d bytes=%d", status, len(content))
            if status in _RETRYABLE_STATUSES and not final:
                self._log.warning("retryable status, backing off status=%d attempt=%d", status, attempt + 1)
                self._backoff(attempt, cancel)
                continue
            if status >= 400:
                raise HTTPError(status, target, snippet(content), content)
            return content
        raise AssertionError("unreachable")