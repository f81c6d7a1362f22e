"""
Pytest configuration and fixtures for testing.

Every test gets a fresh application backed by an in-memory SQLite store, so
no MySQL server is needed.
"""
import os

# Set test environment variables BEFORE importing the application package
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'sfndsfojoriwew09rjfjndsknfkj'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['API_PREFIX'] = ''
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['MIN_PASSWORD_LENGTH'] = '6'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['ALLOW_ADMIN_REGISTRATION'] = 'false'
os.environ['UNIFY_LOGIN_ERRORS'] = 'false'

import pytest

from quizmaster import create_app, db
from quizmaster.security import get_rate_limiter

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
    'RATE_LIMIT_ENABLED': False,
    'BCRYPT_ROUNDS': 4,
}

ADMIN = {'username': 'admin', 'email': 'admin@example.com', 'password': 'adminpass'}
ALICE = {'username': 'alice', 'email': 'alice@example.com', 'password': 'secret1'}

CAPITALS = {
    'title': 'Capitals',
    'description': 'European capitals',
    'questions': [
        {
            'questionText': 'Capital of France?',
            'options': [{'text': 'Paris', 'isCorrect': True}, {'text': 'Lyon', 'isCorrect': False}],
        },
        {
            'questionText': 'Capital of Italy?',
            'options': ['Milan', 'Rome', 'Turin'],
            'correctOptionIndex': 1,
        },
    ],
}


def make_app(**overrides):
    config = dict(TEST_CONFIG)
    config.update(overrides)
    return create_app(config)


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = make_app()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
    get_rate_limiter().reset()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def admin_account(app):
    """Seed an admin the same way the create-admin command does."""
    from quizmaster.cli import create_admin
    with app.app_context():
        user, _ = create_admin(ADMIN['username'], ADMIN['email'], ADMIN['password'])
        return {'id': user.id, **ADMIN}


def register(client, username, email, password, **extra):
    return client.post('/register', json={
        'username': username,
        'email': email,
        'password': password,
        **extra,
    })


def login(client, email, password):
    return client.post('/login', json={'email': email, 'password': password})


@pytest.fixture
def admin_client(app, admin_account):
    """A test client holding an admin session cookie."""
    client = app.test_client()
    response = login(client, admin_account['email'], admin_account['password'])
    assert response.status_code == 200
    return client


@pytest.fixture
def user_client(app):
    """A test client registered and logged in as alice."""
    client = app.test_client()
    assert register(client, **ALICE).status_code == 201
    response = login(client, ALICE['email'], ALICE['password'])
    assert response.status_code == 200
    client.user_id = response.get_json()['userId']
    return client


@pytest.fixture
def capitals_quiz(admin_client):
    """The two-question Capitals quiz, created through the admin API."""
    response = admin_client.post('/admin/quiz', json=CAPITALS)
    assert response.status_code == 201
    return response.get_json()['quiz']
