import ipaddress
import math
import time
from threading import Lock

from flask import current_app, g, request
from flask_cors import CORS

from classes.errors import RateLimitExceeded
from utils.response import ApiResponse
from utils.security_logger import log_api_usage, log_rate_limit_exceeded

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; script-src 'none'; object-src 'none'",
    "Permissions-Policy": "camera=(), microphone=(), geolocation=(), payment=()",
}

CLIENT_IP_HEADERS = ("X-Forwarded-For", "X-Real-IP", "Client-IP")


def get_client_ip():
    """First valid address from the proxy headers, else the peer address."""
    for header in CLIENT_IP_HEADERS:
        value = request.headers.get(header)
        if not value:
            continue
        candidate = value.split(",")[0].strip()
        try:
            ipaddress.ip_address(candidate)
        except ValueError:
            continue
        return candidate

    return request.remote_addr or "127.0.0.1"


class RateLimitState:
    def __init__(self, allowed, limit, remaining, reset_at, retry_after):
        self.allowed = allowed
        self.limit = limit
        self.remaining = remaining
        self.reset_at = reset_at
        self.retry_after = retry_after

    @property
    def headers(self):
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(int(self.reset_at)),
        }


class FixedWindowRateLimiter:
    """
    Caps requests per client address inside a fixed time window.

    Each address owns a (window_start, count) pair; the pair is reset once
    window_seconds have elapsed since window_start. All reads and writes
    happen under one lock so concurrent hits for an address are counted
    exactly.
    """

    PRUNE_THRESHOLD = 1024

    def __init__(self, max_requests, window_seconds, clock=time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows = {}
        self._lock = Lock()

    def hit(self, key):
        with self._lock:
            now = self._clock()
            if len(self._windows) > self.PRUNE_THRESHOLD:
                self._prune(now)

            window_start, count = self._windows.get(key, (now, 0))
            if now - window_start >= self.window_seconds:
                window_start, count = now, 0

            reset_at = window_start + self.window_seconds
            if count >= self.max_requests:
                self._windows[key] = (window_start, count)
                retry_after = max(1, math.ceil(reset_at - now))
                return RateLimitState(False, self.max_requests, 0, reset_at, retry_after)

            count += 1
            self._windows[key] = (window_start, count)
            return RateLimitState(True, self.max_requests, self.max_requests - count, reset_at, 0)

    def reset(self, key=None):
        with self._lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    def _prune(self, now):
        expired = [
            key for key, (window_start, _) in self._windows.items()
            if now - window_start >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]


def apply_security_headers(response):
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    if request.is_secure:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains; preload"
    return response


def check_rate_limit():
    g.start_time = time.perf_counter()
    g.rate_limit = None

    if not current_app.config.get("RATE_LIMIT_ENABLED", True) or request.method == "OPTIONS":
        return None

    limiter = current_app.extensions["rate_limiter"]
    state = limiter.hit(get_client_ip())
    g.rate_limit = state

    if state.allowed:
        return None

    log_rate_limit_exceeded(state.limit, limiter.window_seconds)
    envelope = ApiResponse.from_error(RateLimitExceeded(state.limit, state.retry_after, state.reset_at))
    envelope.headers.update(state.headers)
    return envelope.to_response()


def finalize_response(response):
    apply_security_headers(response)

    state = g.get("rate_limit")
    if state is not None and state.allowed:
        for name, value in state.headers.items():
            response.headers[name] = value

    started = g.get("start_time")
    elapsed = time.perf_counter() - started if started is not None else 0.0
    log_api_usage(request.path, response.status_code, elapsed)
    return response


def init_security(app):
    """Register CORS, the rate limiter and the response hooks on app."""
    CORS(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", [])}},
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With"],
        max_age=86400,
    )

    app.extensions["rate_limiter"] = FixedWindowRateLimiter(
        app.config.get("RATE_LIMIT_REQUESTS", 100),
        app.config.get("RATE_LIMIT_WINDOW", 3600),
    )
    app.before_request(check_rate_limit)
    app.after_request(finalize_response)
