from functools import wraps

from flask import current_app, request
from flask_login import current_user

from quizmaster.errors import Forbidden
from quizmaster.security import SecurityLogger


def role_required(role: str):
    """
    Decorator to require an exact role for a route.

    The role is the one carried by the verified session token. An anonymous
    request gets 401 through the login manager; a wrong role gets 403.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not current_user.is_authenticated:
                return current_app.login_manager.unauthorized()
            if current_user.role != role:
                SecurityLogger.log_unauthorized_access(request.path, current_user.id)
                raise Forbidden(f"Forbidden: {role.capitalize()}s only access")
            return f(*args, **kwargs)
        return decorated_function
    return decorator


admin_required = role_required("admin")
