"""
Test cases for cascading deletes and their transactional behaviour.
"""
from unittest import mock

from flask import abort
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from conftest import make_app
from quizmaster.quiz.models import Question, QuestionOption, Quiz, Result
from quizmaster.quiz.service import QuizService

STORE_DOWN = OperationalError('COMMIT', {}, Exception('store down'))


def _counts(app):
    with app.app_context():
        return {
            'quizzes': Quiz.query.count(),
            'questions': Question.query.count(),
            'options': QuestionOption.query.count(),
            'results': Result.query.count(),
        }


class TestQuizDeletion:
    """Test cases for deleting quizzes."""

    def test_delete_quiz_removes_results(self, app, admin_client, user_client, capitals_quiz):
        url = f"/quiz/{capitals_quiz['id']}/submit"
        user_client.post(url, json={'answers': [0, 1]})
        admin_client.post(url, json={'answers': [1, 0]})

        response = admin_client.delete(f"/admin/quiz/{capitals_quiz['id']}")
        assert response.status_code == 200
        assert response.get_json() == {
            'message': 'Quiz and associated results deleted successfully',
            'deletedResults': 2,
        }
        assert _counts(app) == {'quizzes': 0, 'questions': 0, 'options': 0, 'results': 0}

        profile = user_client.get('/me').get_json()
        assert profile['results'] == []
        assert profile['totalScore'] == 0

    def test_delete_quiz_leaves_other_results(self, app, admin_client, user_client, capitals_quiz):
        from conftest import CAPITALS
        other = admin_client.post('/admin/quiz', json=dict(CAPITALS, title='Rivers')).get_json()['quiz']
        user_client.post(f"/quiz/{capitals_quiz['id']}/submit", json={'answers': [0, 1]})
        user_client.post(f"/quiz/{other['id']}/submit", json={'answers': [0, 0]})

        admin_client.delete(f"/admin/quiz/{capitals_quiz['id']}")
        results = user_client.get('/me').get_json()['results']
        assert [r['quiz']['title'] for r in results] == ['Rivers']

    def test_failed_delete_rolls_back(self, app, admin_client, user_client, capitals_quiz):
        user_client.post(f"/quiz/{capitals_quiz['id']}/submit", json={'answers': [0, 1]})
        before = _counts(app)

        with mock.patch.object(Session, 'commit', side_effect=STORE_DOWN):
            response = admin_client.delete(f"/admin/quiz/{capitals_quiz['id']}")
        assert response.status_code == 500
        assert response.get_json()['message'] == 'Server error. Please try again later.'

        assert _counts(app) == before
        assert user_client.get(f"/quizzes/{capitals_quiz['id']}").status_code == 200

    def test_failed_submission_records_nothing(self, app, user_client, capitals_quiz):
        with mock.patch.object(Session, 'commit', side_effect=STORE_DOWN):
            response = user_client.post(f"/quiz/{capitals_quiz['id']}/submit", json={'answers': [0, 1]})
        assert response.status_code == 500
        assert _counts(app)['results'] == 0


class TestHealth:
    """Test cases for the store health check."""

    def test_health_reports_unreachable_store(self, client):
        with mock.patch.object(Session, 'execute', side_effect=STORE_DOWN):
            response = client.get('/health')
        assert response.status_code == 503
        assert response.get_json() == {'status': 'unavailable'}


class TestUnexpectedErrors:
    """Test cases for errors outside the API's own taxonomy."""

    def test_unexpected_error_is_json(self, user_client):
        with mock.patch.object(QuizService, 'list_quizzes', side_effect=RuntimeError('boom')):
            response = user_client.get('/quizzes')
        assert response.status_code == 500
        assert response.is_json
        assert response.get_json() == {'message': 'Server error. Please try again later.'}

    def test_oversized_quiz_id_is_json(self, user_client):
        response = user_client.get('/quizzes/99999999999999999999')
        assert response.status_code == 500
        assert response.is_json
        assert response.get_json()['message'] == 'Server error. Please try again later.'

    def test_http_errors_keep_their_status(self):
        app = make_app()

        @app.route('/teapot')
        def teapot():
            abort(418)

        response = app.test_client().get('/teapot')
        assert response.status_code == 418
