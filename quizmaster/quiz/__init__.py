"""
Quiz module: the quiz store, grading and the result ledger.

Authenticated users list and take quizzes here; admins author them
through the admin blueprint.
"""
from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__)

from quizmaster.quiz import routes  # noqa: E402,F401
