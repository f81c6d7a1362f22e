"""
Security headers module.

Adds security headers to every API response.
"""

from flask import current_app


class SecurityHeaders:
    """
    Security headers middleware.

    The API only ever returns JSON, so the content policy forbids every
    kind of subresource and framing.
    """

    @staticmethod
    def init_app(app):
        """
        Initialize security headers for the Flask app.

        Args:
            app: Flask application instance
        """
        @app.after_request
        def add_security_headers(response):
            """Add security headers to all responses."""
            response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"

            # X-Content-Type-Options: Prevent MIME type sniffing
            response.headers['X-Content-Type-Options'] = 'nosniff'

            # X-Frame-Options: Prevent clickjacking
            response.headers['X-Frame-Options'] = 'DENY'

            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

            # Responses carry per-user data
            response.headers.setdefault('Cache-Control', 'no-store')

            # Strict-Transport-Security: Force HTTPS (only when cookies are Secure)
            if current_app.config.get('SESSION_TOKEN_SECURE', False):
                response.headers['Strict-Transport-Security'] = (
                    'max-age=31536000; includeSubDomains'
                )

            return response
