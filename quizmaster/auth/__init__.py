from flask import Blueprint

# Blueprint for registration, login/logout and the profile view
auth_bp = Blueprint("auth", __name__)

# Import routes so that they are registered with the blueprint
from quizmaster.auth import routes  # noqa: E402,F401
