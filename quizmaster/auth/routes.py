from flask import jsonify
from flask_login import current_user, login_required

from quizmaster.auth import auth_bp
from quizmaster.auth.service import AuthService
from quizmaster.auth.tokens import clear_session_cookie, issue_token, set_session_cookie
from quizmaster.common.http import json_body
from quizmaster.security import rate_limit


@auth_bp.route("/register", methods=["POST"])
@rate_limit()
def register():
    data = json_body()
    user = AuthService.register_user(
        username=data.get("username"),
        email=data.get("email"),
        password=data.get("password"),
        role=data.get("role"),
    )
    return jsonify({"message": "User registered successfully", "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
@rate_limit()
def login():
    data = json_body()
    user = AuthService.authenticate(data.get("email"), data.get("password"))

    token = issue_token(user.id, user.role)
    response = jsonify({
        "message": "Login successful",
        "role": user.role,
        "userId": user.id,
        "username": user.username,
    })
    set_session_cookie(response, token)
    return response, 200


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """Tokens are stateless: logging out only tells the client to drop the cookie."""
    response = jsonify({"message": "Logged out successfully"})
    clear_session_cookie(response)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify(AuthService.get_profile(current_user.id)), 200
