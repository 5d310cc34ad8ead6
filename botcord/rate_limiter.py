"""Per-endpoint and global rate limiting, plus a background request queue."""

from __future__ import annotations

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Optional

_log = logging.getLogger(__name__)


@dataclass
class RateLimitInfo:
    """Rate limit state reported for an endpoint; reset_time is a time.monotonic() value."""

    remaining: int = -1
    limit: int = -1
    reset_time: float = 0.0
    is_global: bool = False


@dataclass
class _EndpointLimit:
    max_requests: int
    window: float
    request_times: deque = field(default_factory=deque)


class RateLimiter:
    """Tracks server-reported and locally configured limits. Durations are in seconds."""

    def __init__(self) -> None:
        self._rate_limits: dict[str, RateLimitInfo] = {}
        self._endpoint_limits: dict[str, _EndpointLimit] = {}
        self._global_reset_time = float("-inf")
        self._lock = threading.Lock()
        self._cond = threading.Condition(self._lock)

    def update_limits(self, endpoint: str, info: RateLimitInfo) -> None:
        with self._lock:
            self._rate_limits[endpoint] = info
            if info.is_global:
                self._global_reset_time = info.reset_time

    def can_make_request(self, endpoint: str) -> bool:
        with self._lock:
            now = time.monotonic()
            if now < self._global_reset_time:
                return False
            info = self._rate_limits.get(endpoint)
            if info is not None and info.remaining == 0 and now < info.reset_time:
                return False
            limit = self._endpoint_limits.get(endpoint)
            if limit is not None:
                self._cleanup_old_requests(limit, now)
                if len(limit.request_times) >= limit.max_requests:
                    return False
            return True

    def wait_if_needed(self, endpoint: str) -> None:
        """Block until the endpoint may be used, or until woken."""
        wait = self.get_wait_time(endpoint)
        if wait > 0:
            with self._cond:
                self._cond.wait(wait)

    def set_global_limit(self, delay: float) -> None:
        with self._lock:
            self._global_reset_time = time.monotonic() + delay

    def set_endpoint_limit(self, endpoint: str, max_requests: int, window: float) -> None:
        with self._lock:
            self._endpoint_limits[endpoint] = _EndpointLimit(max_requests, window)

    def get_wait_time(self, endpoint: str) -> float:
        """Seconds to wait before a request to endpoint is allowed; 0.0 if none."""
        with self._lock:
            now = time.monotonic()
            if now < self._global_reset_time:
                return self._global_reset_time - now
            info = self._rate_limits.get(endpoint)
            if info is not None and info.remaining == 0 and now < info.reset_time:
                return info.reset_time - now
            limit = self._endpoint_limits.get(endpoint)
            if limit is not None:
                self._cleanup_old_requests(limit, now)
                if limit.request_times and len(limit.request_times) >= limit.max_requests:
                    reset_time = limit.request_times[0] + limit.window
                    if reset_time > now:
                        return reset_time - now
            return 0.0

    @staticmethod
    def _cleanup_old_requests(limit: _EndpointLimit, now: float) -> None:
        cutoff = now - limit.window
        while limit.request_times and limit.request_times[0] < cutoff:
            limit.request_times.popleft()


@dataclass
class _QueuedRequest:
    endpoint: str
    function: Callable[[], object]
    enqueue_time: float


class RequestQueue:
    """Runs queued request callables one at a time on a worker thread."""

    def __init__(self) -> None:
        self._requests: deque[_QueuedRequest] = deque()
        self._rate_limiter: Optional[RateLimiter] = None
        self._worker: Optional[threading.Thread] = None
        self._cond = threading.Condition()
        self._running = False

    def enqueue(self, endpoint: str, request: Callable[[], object]) -> None:
        with self._cond:
            self._requests.append(_QueuedRequest(endpoint, request, time.monotonic()))
            self._cond.notify()

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._worker = threading.Thread(target=self._process_requests, daemon=True)
        self._worker.start()

    def stop(self) -> None:
        if not self._running:
            return
        with self._cond:
            self._running = False
            self._cond.notify_all()
        if self._worker is not None:
            self._worker.join()
            self._worker = None

    def set_rate_limiter(self, rate_limiter: Optional[RateLimiter]) -> None:
        self._rate_limiter = rate_limiter

    def __enter__(self) -> "RequestQueue":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _process_requests(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._requests or not self._running)
                if not self._running:
                    break
                request = self._requests.popleft()
            limiter = self._rate_limiter
            if limiter is not None:
                limiter.wait_if_needed(request.endpoint)
            try:
                request.function()
            except Exception:
                _log.exception("Queued request for %s failed", request.endpoint)