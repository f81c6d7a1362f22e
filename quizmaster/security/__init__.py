"""
Security module for the application.

This module provides:
- Rate limiting for the credential endpoints
- Security headers
- Security logging
"""

from .rate_limiter import RateLimiter, rate_limit, get_rate_limiter
from .security_headers import SecurityHeaders
from .security_logger import SecurityLogger
from .security_init import init_security

__all__ = [
    'RateLimiter',
    'rate_limit',
    'get_rate_limiter',
    'SecurityHeaders',
    'SecurityLogger',
    'init_security',
]
