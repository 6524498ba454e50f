"""Per-IP sliding-window rate limiting for the /api routes."""
from __future__ import annotations

import logging
import math
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitRule:
    name: str
    limit: int
    window_seconds: int
    message: str
    path_prefix: str
    methods: frozenset[str] | None = None  # None: any method
    exact_path: bool = False
    skip_successful: bool = False  # refund hits that end with status < 400

    def matches(self, method: str, path: str) -> bool:
        if self.methods is not None and method.upper() not in self.methods:
            return False
        if self.exact_path:
            return path.rstrip("/") == self.path_prefix.rstrip("/")
        return path.startswith(self.path_prefix)


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # seconds until the oldest counted hit leaves the window
    stamp: float | None = None  # the recorded hit, for refunds

    def headers(self) -> dict[str, str]:
        return {
            "RateLimit-Limit": str(self.limit),
            "RateLimit-Remaining": str(self.remaining),
            "RateLimit-Reset": str(self.reset_after),
        }


class InMemoryRateLimiter:
    """Sliding-window counter keyed by arbitrary strings. Process-local.

    Keys whose hits have all aged out are dropped, and every
    ``sweep_interval`` seconds the whole map is scanned for such keys so
    clients that never come back do not stay resident.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic, sweep_interval: float = 60.0) -> None:
        self._hits: dict[str, deque[float]] = {}
        self._windows: dict[str, int] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._sweep_interval = sweep_interval
        self._last_sweep = clock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def hit(self, key: str, *, limit: int, window_seconds: int) -> RateLimitDecision:
        now = self._clock()
        window = max(int(window_seconds), 1)
        max_hits = max(int(limit), 1)
        with self._lock:
            if now - self._last_sweep >= self._sweep_interval:
                self._sweep(now)
            bucket = self._hits.setdefault(key, deque())
            self._windows[key] = window
            cutoff = now - window
            while bucket and bucket[0] <= cutoff:
                bucket.popleft()
            if len(bucket) >= max_hits:
                reset_after = max(math.ceil(bucket[0] + window - now), 1)
                return RateLimitDecision(False, max_hits, 0, reset_after)
            bucket.append(now)
            reset_after = max(math.ceil(bucket[0] + window - now), 1)
            remaining = max(max_hits - len(bucket), 0)
            return RateLimitDecision(True, max_hits, remaining, reset_after, stamp=now)

    def refund(self, key: str, stamp: float) -> None:
        with self._lock:
            bucket = self._hits.get(key)
            if not bucket:
                return
            try:
                bucket.remove(stamp)
            except ValueError:
                # already slid out of the window
                pass
            if not bucket:
                self._forget(key)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._windows.clear()
            self._last_sweep = self._clock()

    def _sweep(self, now: float) -> None:
        # caller holds the lock
        stale = [
            key
            for key, bucket in self._hits.items()
            if not bucket or bucket[-1] <= now - self._windows.get(key, 1)
        ]
        for key in stale:
            self._forget(key)
        self._last_sweep = now
        if stale:
            logger.debug("Rate limiter dropped %d idle keys", len(stale))

    def _forget(self, key: str) -> None:
        self._hits.pop(key, None)
        self._windows.pop(key, None)


def build_rules(settings: Settings) -> list[RateLimitRule]:
    return [
        RateLimitRule(
            name="api",
            limit=settings.rate_limit_api_requests,
            window_seconds=settings.rate_limit_api_window_seconds,
            message="Too many requests, please try again later",
            path_prefix="/api/",
        ),
        RateLimitRule(
            name="strict",
            limit=settings.rate_limit_strict_requests,
            window_seconds=settings.rate_limit_strict_window_seconds,
            message="Too many authentication attempts",
            path_prefix="/api/community/message",
            methods=frozenset({"POST"}),
            exact_path=True,
            skip_successful=True,
        ),
    ]


def client_ip(request: Request, trust_forwarded_for: bool = False) -> str:
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return first_hop
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def rate_limit_middleware(request: Request, call_next):
    """Apply every matching rule; reject on the first exhausted budget."""
    state = request.app.state
    limiter: InMemoryRateLimiter | None = getattr(state, "rate_limiter", None)
    rules: list[RateLimitRule] = getattr(state, "rate_limit_rules", [])
    if limiter is None or request.method.upper() == "OPTIONS":
        return await call_next(request)

    ip = client_ip(request, getattr(state.settings, "trust_forwarded_for", False))
    counted: list[tuple[RateLimitRule, str, RateLimitDecision]] = []
    for rule in rules:
        if not rule.matches(request.method, request.url.path):
            continue
        key = f"{rule.name}:{ip}"
        decision = limiter.hit(key, limit=rule.limit, window_seconds=rule.window_seconds)
        if not decision.allowed:
            logger.warning(
                "Rate limit %s exceeded for %s on %s %s",
                rule.name, ip, request.method, request.url.path,
            )
            headers = decision.headers()
            headers["Retry-After"] = str(decision.reset_after)
            return JSONResponse({"error": rule.message}, status_code=429, headers=headers)
        counted.append((rule, key, decision))

    response = await call_next(request)

    for rule, key, decision in counted:
        if rule.skip_successful and response.status_code < 400 and decision.stamp is not None:
            limiter.refund(key, decision.stamp)

    if counted:
        tightest = min(counted, key=lambda item: item[2].remaining)[2]
        response.headers.update(tightest.headers())
    return response
