"""Admin routes for authoring quizzes and managing users."""
from flask import jsonify, request
from flask_login import current_user, login_required

from quizmaster.admin import admin_bp
from quizmaster.admin.service import UserAdminService
from quizmaster.common.decorators import admin_required
from quizmaster.common.http import json_body
from quizmaster.quiz.service import QuizService
from quizmaster.quiz.validators import validate_quiz_payload


@admin_bp.route('/quiz', methods=['POST'])
@login_required
@admin_required
def create_quiz():
    """
    Create a quiz.

    Request body:
    {
        "title": "Capitals",
        "description": "Optional description",
        "questions": [
            {
                "questionText": "Capital of France?",
                "options": [{"text": "Paris", "isCorrect": true}, {"text": "Lyon", "isCorrect": false}],
                "correctOptionIndex": 0
            }
        ]
    }
    """
    cleaned = validate_quiz_payload(request.get_json(silent=True))
    quiz = QuizService.create_quiz(cleaned, created_by=current_user.id)
    return jsonify({'message': 'Quiz created successfully!', 'quiz': quiz.to_dict()}), 201


@admin_bp.route('/quiz/<int:quiz_id>', methods=['PUT'])
@login_required
@admin_required
def update_quiz(quiz_id):
    """Partial update of title/description; a questions array replaces all questions."""
    QuizService.get_quiz(quiz_id)
    cleaned = validate_quiz_payload(request.get_json(silent=True), partial=True)
    quiz = QuizService.update_quiz(quiz_id, cleaned)
    return jsonify({'message': 'Quiz updated successfully!', 'quiz': quiz.to_dict()}), 200


@admin_bp.route('/quiz/<int:quiz_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_quiz(quiz_id):
    removed = QuizService.delete_quiz(quiz_id)
    return jsonify({
        'message': 'Quiz and associated results deleted successfully',
        'deletedResults': removed,
    }), 200


@admin_bp.route('/users', methods=['GET'])
@login_required
@admin_required
def list_users():
    users = UserAdminService.list_users()
    return jsonify([user.to_dict() for user in users]), 200


@admin_bp.route('/user/<int:user_id>', methods=['PATCH'])
@login_required
@admin_required
def update_user_role(user_id):
    data = json_body()
    user = UserAdminService.change_role(current_user.id, user_id, data.get('role'))
    return jsonify({
        'message': 'User role updated successfully',
        'user': user.username,
        'newRole': user.role,
    }), 200


@admin_bp.route('/user/<int:user_id>', methods=['DELETE'])
@login_required
@admin_required
def delete_user(user_id):
    removed = UserAdminService.delete_user(current_user.id, user_id)
    return jsonify({
        'message': 'User and associated results deleted successfully',
        'deletedResults': removed,
    }), 200
