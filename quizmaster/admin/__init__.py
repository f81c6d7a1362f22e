"""Admin blueprint for quiz authoring and user management."""
from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from quizmaster.admin import routes  # noqa: E402,F401
