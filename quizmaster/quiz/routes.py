"""
Quiz routes for authenticated users.

Users can:
- List quizzes and fetch a single quiz (answer key hidden unless admin)
- Submit an answer sheet and get their score back
"""
from flask import jsonify
from flask_login import current_user, login_required

from quizmaster.common.http import json_body
from quizmaster.quiz import quiz_bp
from quizmaster.quiz.service import QuizService


def _show_answer_key() -> bool:
    # Quiz takers only see questions and option texts, to prevent cheating
    return current_user.is_admin()


@quiz_bp.route('/quizzes', methods=['GET'])
@login_required
def list_quizzes():
    include_key = _show_answer_key()
    quizzes = QuizService.list_quizzes()
    return jsonify([quiz.to_dict(include_answer_key=include_key) for quiz in quizzes]), 200


@quiz_bp.route('/quizzes/<int:quiz_id>', methods=['GET'])
@login_required
def get_quiz(quiz_id):
    quiz = QuizService.get_quiz(quiz_id)
    return jsonify(quiz.to_dict(include_answer_key=_show_answer_key())), 200


@quiz_bp.route('/quiz/<int:quiz_id>/submit', methods=['POST'])
@login_required
def submit_quiz(quiz_id):
    """
    Grade a submission.

    Request body:
    {
        "answers": [0, 2, 1]  // one option index per question, in order
    }
    """
    data = json_body()
    graded = QuizService.submit(quiz_id, current_user.id, data.get('answers'))
    return jsonify({
        'message': 'Quiz submitted successfully',
        'score': graded.score,
        'total': graded.total,
    }), 200
