"""
Audit log for authentication and account events.

Every line starts with ``SECURITY:`` and ends with the client IP and a UTC
timestamp so the events can be grepped out of the application log.
"""
import logging
from datetime import datetime

from flask import current_app, request


def _emit(level: int, event: str, **fields) -> None:
    details = ", ".join(f"{key}: {value}" for key, value in fields.items())
    current_app.logger.log(
        level,
        f"SECURITY: {event} - {details}, IP: {request.remote_addr}, "
        f"Time: {datetime.utcnow().isoformat()}",
    )


class SecurityLogger:
    """Named audit events; callers never format log lines themselves."""

    @staticmethod
    def log_failed_login(email: str, reason: str = "Invalid credentials"):
        _emit(logging.WARNING, "Failed login", Email=email, Reason=reason)

    @staticmethod
    def log_successful_login(user_id: int, email: str):
        _emit(logging.INFO, "Successful login", **{"User ID": user_id, "Email": email})

    @staticmethod
    def log_invalid_token(reason: str):
        """A session cookie failed verification and is being discarded."""
        _emit(logging.WARNING, "Rejected session token", Path=request.path, Reason=reason)

    @staticmethod
    def log_unauthorized_access(resource: str, user_id: int | None = None):
        """An authenticated principal hit a route its role does not allow."""
        who = f"User ID {user_id}" if user_id else "Unauthenticated"
        _emit(logging.WARNING, "Forbidden access", Principal=who, Resource=resource)

    @staticmethod
    def log_self_modification_blocked(admin_id: int, action: str):
        _emit(logging.WARNING, "Blocked self-targeted admin action", **{"Admin ID": admin_id, "Action": action})

    @staticmethod
    def log_role_change(admin_id: int, user_id: int, old_role: str, new_role: str):
        _emit(
            logging.INFO,
            "Role changed",
            **{"Admin ID": admin_id, "User ID": user_id, "Roles": f"{old_role} -> {new_role}"},
        )

    @staticmethod
    def log_user_deleted(admin_id: int, user_id: int):
        _emit(logging.INFO, "User deleted", **{"Admin ID": admin_id, "User ID": user_id})

    @staticmethod
    def log_rate_limit_exceeded(identifier: str, endpoint: str):
        _emit(logging.WARNING, "Rate limit exceeded", Identifier=identifier, Endpoint=endpoint)
