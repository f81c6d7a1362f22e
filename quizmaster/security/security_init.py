"""
Security initialization module.

This module initializes all security features for the Flask application.
"""

from flask import Flask
from .security_headers import SecurityHeaders


def init_security(app: Flask):
    """
    Initialize all security features for the Flask app.

    Args:
        app: Flask application instance
    """
    SecurityHeaders.init_app(app)

    app.logger.info(
        "Security features initialized (rate limiting %s)",
        "enabled" if app.config.get("RATE_LIMIT_ENABLED") else "disabled",
    )
