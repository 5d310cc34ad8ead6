"""HTTP client that performs REST calls on a worker thread and returns futures."""

from __future__ import annotations

import json
import threading
from collections import deque
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

import requests

from .info import version

Headers = Union[Mapping[str, str], Iterable[tuple[str, str]], None]

DEFAULT_BASE_URL = "https://discord.com/api/v10"
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class HTTPError(RuntimeError):
    """A request failed; status is the HTTP status code, or None for transport errors."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class ClientShutdownError(RuntimeError):
    """The client was shut down before the request could be performed."""


@dataclass
class _Request:
    method: str
    url: str
    data: Any
    headers: Headers
    future: Future


def _header_items(headers: Headers) -> Iterable[tuple[str, str]]:
    if headers is None:
        return ()
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


class HTTPClient:
    """Authenticated REST client; request methods return Futures of the decoded JSON."""

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.token = token
        self.base_url = base_url
        self.timeout = 30.0
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()
        self._queue: deque[_Request] = deque()
        self._cond = threading.Condition()
        self._running = True
        self._worker = threading.Thread(target=self._worker_loop, daemon=True)
        self._worker.start()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def get(self, url: str, headers: Headers = None) -> Future:
        return self._submit("GET", url, None, headers)

    def post(self, url: str, data: Any = None, headers: Headers = None) -> Future:
        return self._submit("POST", url, data, headers)

    def put(self, url: str, data: Any = None, headers: Headers = None) -> Future:
        return self._submit("PUT", url, data, headers)

    def patch(self, url: str, data: Any = None, headers: Headers = None) -> Future:
        return self._submit("PATCH", url, data, headers)

    def delete(self, url: str, headers: Headers = None) -> Future:
        return self._submit("DELETE", url, None, headers)

    def set_timeout(self, timeout: float) -> None:
        """Set the per-request timeout in seconds."""
        self.timeout = timeout

    def default_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bot {self.token}",
            "User-Agent": f"DiscordBot (botcord, {version()})",
            "Content-Type": "application/json",
        }

    def shutdown(self) -> None:
        """Stop the worker and fail every request still waiting in the queue."""
        with self._cond:
            self._running = False
            self._cond.notify_all()
        if self._worker.is_alive() and threading.current_thread() is not self._worker:
            self._worker.join()
        with self._cond:
            pending = list(self._queue)
            self._queue.clear()
        for request in pending:
            if request.future.set_running_or_notify_cancel():
                request.future.set_exception(ClientShutdownError("HTTP client shutting down"))
        if self._owns_session:
            self._session.close()

    def _submit(self, method: str, url: str, data: Any, headers: Headers) -> Future:
        future: Future = Future()
        with self._cond:
            if not self._running:
                raise ClientShutdownError("HTTP client shutting down")
            self._queue.append(_Request(method, self.base_url + url, data, headers, future))
            self._cond.notify()
        return future

    def _worker_loop(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._queue or not self._running)
                if not self._running:
                    return
                request = self._queue.popleft()
            if not request.future.set_running_or_notify_cancel():
                continue
            try:
                text = self._perform(request)
                result = json.loads(text) if text else None
            except Exception as exc:
                request.future.set_exception(exc)
            else:
                request.future.set_result(result)

    def _perform(self, request: _Request) -> str:
        headers = self.default_headers()
        headers.update(_header_items(request.headers))
        body = json.dumps(request.data) if request.method in _BODY_METHODS else None
        try:
            response = self._session.request(
                request.method,
                request.url,
                data=body,
                headers=headers,
                timeout=self.timeout,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise HTTPError(f"Request failed: {exc}") from exc

        if response.status_code >= 400:
            message = f"HTTP error {response.status_code}"
            if response.text:
                try:
                    payload = response.json()
                except ValueError:
                    payload = None
                if isinstance(payload, dict) and isinstance(payload.get("message"), str):
                    message += ": " + payload["message"]
            raise HTTPError(message, response.status_code)
        return response.text