"""
Stateless session tokens.

A token is an itsdangerous timed signature over ``{"uid", "role"}``. Validity
is decided by the signature and the signing timestamp alone, so nothing is
stored server-side and a token cannot be revoked before it expires; logout
only tells the client to drop the cookie.
"""
from datetime import datetime, timedelta

from flask import current_app
from flask_login import UserMixin
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from quizmaster.errors import Unauthorized

TOKEN_SALT = "quizmaster.session-token"
ROLES = ("user", "admin")


class SessionPrincipal(UserMixin):
    """Identity recovered from a verified token; used as Flask-Login's current_user."""

    def __init__(self, user_id: int, role: str, issued_at: datetime, expires_at: datetime):
        self.id = user_id
        self.role = role
        self.issued_at = issued_at
        self.expires_at = expires_at

    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:  # pragma: no cover
        return f"<SessionPrincipal user={self.id} role={self.role}>"


def token_lifetime() -> timedelta:
    return timedelta(hours=current_app.config["TOKEN_MAX_AGE_HOURS"])


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user_id: int, role: str) -> str:
    """Sign a token for the given user id and role."""
    return _serializer().dumps({"uid": user_id, "role": role})


def verify_token(token: str) -> SessionPrincipal:
    """
    Verify signature and expiry and return the embedded identity.

    Raises Unauthorized for a missing, tampered, malformed or expired token.
    """
    if not token:
        raise Unauthorized("Unauthorized: No token provided")

    lifetime = token_lifetime()
    try:
        payload, signed_at = _serializer().loads(
            token, max_age=int(lifetime.total_seconds()), return_timestamp=True
        )
    except SignatureExpired:
        raise Unauthorized("Unauthorized: Invalid or expired token")
    except BadSignature:
        raise Unauthorized("Unauthorized: Invalid or expired token")

    if not isinstance(payload, dict):
        raise Unauthorized("Unauthorized: Invalid or expired token")
    user_id = payload.get("uid")
    role = payload.get("role")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or role not in ROLES:
        raise Unauthorized("Unauthorized: Invalid or expired token")

    return SessionPrincipal(
        user_id=user_id,
        role=role,
        issued_at=signed_at,
        expires_at=signed_at + lifetime,
    )


def set_session_cookie(response, token: str):
    """Attach the token as an HTTP-only cookie that lives as long as the token."""
    cfg = current_app.config
    response.set_cookie(
        cfg["SESSION_TOKEN_COOKIE"],
        token,
        max_age=int(token_lifetime().total_seconds()),
        httponly=True,
        secure=cfg["SESSION_TOKEN_SECURE"],
        samesite=cfg["SESSION_TOKEN_SAMESITE"],
        path="/",
    )
    return response


def clear_session_cookie(response):
    cfg = current_app.config
    response.delete_cookie(
        cfg["SESSION_TOKEN_COOKIE"],
        httponly=True,
        secure=cfg["SESSION_TOKEN_SECURE"],
        samesite=cfg["SESSION_TOKEN_SAMESITE"],
        path="/",
    )
    return response
