"""
Error taxonomy for the API.

Every error raised from a route or service is a QuizMasterError subclass and
is rendered as a JSON body ``{"message": ...}`` with its HTTP status.
"""
from flask import Flask, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException


class QuizMasterError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(QuizMasterError):
    status_code = 400
    default_message = "Invalid request"


class MalformedAnswers(ValidationError):
    default_message = "Invalid answers array provided"


class DuplicateResource(QuizMasterError):
    status_code = 409
    default_message = "Resource already exists"


class NotFound(QuizMasterError):
    status_code = 404
    default_message = "Not found"


class Unauthorized(QuizMasterError):
    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentials(Unauthorized):
    default_message = "Invalid credentials"


class Forbidden(QuizMasterError):
    status_code = 403
    default_message = "Forbidden"


def register_error_handlers(app: Flask) -> None:
    """Render the error taxonomy, routing errors and store failures as JSON."""

    @app.errorhandler(QuizMasterError)
    def handle_quizmaster_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(e):
        from quizmaster import db
        db.session.rollback()
        current_app.logger.exception(f"Store error on {request.method} {request.path}")
        return jsonify({"message": "Server error. Please try again later."}), 500

    @app.errorhandler(404)
    def handle_404(e):
        current_app.logger.warning(f"404 error: {request.method} {request.path}")
        return jsonify({"message": f"Route not found: {request.method} {request.path}"}), 404

    @app.errorhandler(405)
    def handle_405(e):
        current_app.logger.warning(f"405 error: {request.method} {request.path}")
        return jsonify({"message": f"Method not allowed: {request.method} {request.path}"}), 405

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        # Routing and other HTTP errors keep their own status codes
        if isinstance(e, HTTPException):
            return e
        from quizmaster import db
        db.session.rollback()
        current_app.logger.exception(f"Unhandled error on {request.method} {request.path}")
        return jsonify({"message": "Server error. Please try again later."}), 500
