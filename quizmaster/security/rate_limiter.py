"""
Rate limiting module to slow down credential guessing.

Request timestamps are kept in process memory per client IP and checked
against a sliding window.
"""

from functools import wraps
from flask import request, jsonify, current_app, make_response
from collections import defaultdict
import threading
import time

from .security_logger import SecurityLogger


class RateLimiter:
    """
    Rate limiter that tracks requests per identifier.

    Uses a sliding window algorithm to track requests within a time period.
    """

    def __init__(self):
        """Initialize the rate limiter with empty storage."""
        self._storage = defaultdict(list)
        self._lock = threading.Lock()
        self._cleanup_interval = 3600  # Clean up old entries every hour
        self._last_cleanup = time.time()

    def _cleanup_old_entries(self):
        """Remove identifiers with no request in the last hour."""
        current_time = time.time()
        if current_time - self._last_cleanup < self._cleanup_interval:
            return

        with self._lock:
            cutoff = current_time - 3600
            for key in list(self._storage):
                self._storage[key] = [ts for ts in self._storage[key] if ts > cutoff]
                if not self._storage[key]:
                    del self._storage[key]
            self._last_cleanup = current_time

    def is_allowed(self, identifier: str, max_requests: int, window_seconds: int) -> tuple[bool, int]:
        """
        Check if a request is allowed based on rate limit.

        Args:
            identifier: Unique identifier (IP address plus endpoint)
            max_requests: Maximum number of requests allowed
            window_seconds: Time window in seconds

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        self._cleanup_old_entries()

        current_time = time.time()
        cutoff = current_time - window_seconds

        with self._lock:
            timestamps = self._storage[identifier]
            timestamps[:] = [ts for ts in timestamps if ts > cutoff]

            if len(timestamps) >= max_requests:
                return False, 0

            timestamps.append(current_time)
            return True, max_requests - len(timestamps)

    def reset(self, identifier: str | None = None):
        """Reset one identifier, or everything when no identifier is given."""
        with self._lock:
            if identifier is None:
                self._storage.clear()
            elif identifier in self._storage:
                del self._storage[identifier]


# Global rate limiter instance
_rate_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    """Get the global rate limiter instance."""
    return _rate_limiter


def rate_limit(max_requests: int | None = None, window_seconds: int | None = None,
               error_message: str = "Too many attempts. Please try again later."):
    """
    Decorator to rate limit a route per client IP.

    Limits default to AUTH_RATE_LIMIT / AUTH_RATE_WINDOW_SECONDS and the
    check is skipped entirely when RATE_LIMIT_ENABLED is false.

    Example:
        @auth_bp.route('/login', methods=['POST'])
        @rate_limit()
        def login():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            cfg = current_app.config
            if not cfg.get("RATE_LIMIT_ENABLED", True):
                return f(*args, **kwargs)

            limit = max_requests if max_requests is not None else cfg["AUTH_RATE_LIMIT"]
            window = window_seconds if window_seconds is not None else cfg["AUTH_RATE_WINDOW_SECONDS"]
            ip = request.remote_addr or 'unknown'
            identifier = f"ip:{ip}:{request.endpoint}"

            is_allowed, remaining = _rate_limiter.is_allowed(identifier, limit, window)
            reset_at = str(int(time.time()) + window)

            if not is_allowed:
                SecurityLogger.log_rate_limit_exceeded(identifier, request.path)
                response = make_response(jsonify({
                    'message': error_message,
                    'retryAfter': window,
                }), 429)
                response.headers['Retry-After'] = str(window)
                response.headers['X-RateLimit-Limit'] = str(limit)
                response.headers['X-RateLimit-Remaining'] = '0'
                response.headers['X-RateLimit-Reset'] = reset_at
                return response

            response = make_response(f(*args, **kwargs))
            response.headers['X-RateLimit-Limit'] = str(limit)
            response.headers['X-RateLimit-Remaining'] = str(remaining)
            response.headers['X-RateLimit-Reset'] = reset_at
            return response

        return decorated_function
    return decorator
