"""
Test cases for registration, login, logout and the /me profile.
"""
from conftest import ALICE, login, make_app, register


class TestUserRegistration:
    """Test cases for user registration endpoints."""

    def test_register_success(self, client):
        response = register(client, **ALICE)
        assert response.status_code == 201
        data = response.get_json()
        assert data['message'] == 'User registered successfully'
        assert data['user']['username'] == 'alice'
        assert data['user']['role'] == 'user'
        assert 'password' not in data['user']
        assert 'password_hash' not in data['user']

    def test_register_normalizes_email(self, client):
        response = register(client, 'bob', '  Bob@Example.COM ', 'secret1')
        assert response.status_code == 201
        assert response.get_json()['user']['email'] == 'bob@example.com'

    def test_register_missing_fields(self, client):
        """Test registration with missing required fields."""
        response = client.post('/register', json={'email': 'test@test.com'})
        assert response.status_code == 400

    def test_register_without_body(self, client):
        response = client.post('/register', data='not json', content_type='text/plain')
        assert response.status_code == 400

    def test_register_invalid_email(self, client):
        response = register(client, 'alice', 'invalid-email', 'secret1')
        assert response.status_code == 400

    def test_register_short_password(self, client):
        response = register(client, 'alice', 'alice@example.com', '123')
        assert response.status_code == 400
        assert 'at least 6 characters' in response.get_json()['message']

    def test_register_username_length(self, client):
        assert register(client, 'al', 'a@example.com', 'secret1').status_code == 400
        assert register(client, 'a' * 51, 'b@example.com', 'secret1').status_code == 400

    def test_register_duplicate_email(self, client):
        assert register(client, **ALICE).status_code == 201
        response = register(client, 'alice2', ALICE['email'], 'secret1')
        assert response.status_code == 409

    def test_register_duplicate_email_differs_only_in_case(self, client):
        assert register(client, **ALICE).status_code == 201
        response = register(client, 'alice2', ALICE['email'].upper(), 'secret1')
        assert response.status_code == 409

    def test_register_duplicate_username(self, client):
        assert register(client, **ALICE).status_code == 201
        response = register(client, 'alice', 'other@example.com', 'secret1')
        assert response.status_code == 409

    def test_register_invalid_role(self, client):
        response = register(client, 'carol', 'carol@example.com', 'secret1', role='superuser')
        assert response.status_code == 400

    def test_register_admin_forbidden_by_default(self, client):
        response = register(client, 'carol', 'carol@example.com', 'secret1', role='admin')
        assert response.status_code == 403

    def test_register_admin_when_allowed(self):
        app = make_app(ALLOW_ADMIN_REGISTRATION=True)
        response = register(app.test_client(), 'carol', 'carol@example.com', 'secret1', role='admin')
        assert response.status_code == 201
        assert response.get_json()['user']['role'] == 'admin'


class TestUserLogin:
    """Test cases for user login endpoints."""

    def test_login_success_sets_cookie(self, client):
        register(client, **ALICE)
        response = login(client, ALICE['email'], ALICE['password'])
        assert response.status_code == 200
        data = response.get_json()
        assert data['message'] == 'Login successful'
        assert data['role'] == 'user'
        assert data['username'] == 'alice'
        assert isinstance(data['userId'], int)

        set_cookie = response.headers['Set-Cookie']
        assert set_cookie.startswith('token=')
        assert 'HttpOnly' in set_cookie
        assert 'Max-Age=86400' in set_cookie
        assert client.get_cookie('token') is not None

    def test_login_is_case_insensitive_on_email(self, client):
        register(client, **ALICE)
        response = login(client, ALICE['email'].upper(), ALICE['password'])
        assert response.status_code == 200

    def test_login_missing_fields(self, client):
        response = client.post('/login', json={'email': 'test@test.com'})
        assert response.status_code == 400

    def test_login_unknown_email(self, client):
        response = login(client, 'nobody@example.com', 'secret1')
        assert response.status_code == 404
        assert response.get_json()['message'] == 'User not found'

    def test_login_wrong_password(self, client):
        register(client, **ALICE)
        response = login(client, ALICE['email'], 'wrong-password')
        assert response.status_code == 401
        assert client.get_cookie('token') is None

    def test_login_errors_unified(self):
        client = make_app(UNIFY_LOGIN_ERRORS=True).test_client()
        register(client, **ALICE)
        unknown = login(client, 'nobody@example.com', 'secret1')
        wrong = login(client, ALICE['email'], 'wrong-password')
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.get_json() == wrong.get_json()

    def test_long_password_truncated_consistently(self, client):
        password = 'p' * 80
        assert register(client, 'longpw', 'long@example.com', password).status_code == 201
        assert login(client, 'long@example.com', password).status_code == 200


class TestSessionLifecycle:
    """Test cases for /me and logout."""

    def test_me_requires_token(self, client):
        response = client.get('/me')
        assert response.status_code == 401
        assert response.get_json()['message'] == 'Unauthorized: No token provided'

    def test_me_with_garbage_token_clears_cookie(self, client):
        client.set_cookie('token', 'not-a-real-token')
        response = client.get('/me')
        assert response.status_code == 401
        assert response.get_json()['message'] == 'Unauthorized: Invalid or expired token'
        assert client.get_cookie('token') is None

    def test_me_returns_profile(self, user_client):
        response = user_client.get('/me')
        assert response.status_code == 200
        data = response.get_json()
        assert data['user']['username'] == 'alice'
        assert data['user']['email'] == 'alice@example.com'
        assert 'password_hash' not in data['user']
        assert data['results'] == []
        assert data['totalScore'] == 0
        assert data['totalPossible'] == 0

    def test_logout_clears_cookie(self, user_client):
        response = user_client.post('/logout')
        assert response.status_code == 200
        assert response.get_json()['message'] == 'Logged out successfully'
        assert user_client.get_cookie('token') is None
        assert user_client.get('/me').status_code == 401

    def test_logout_without_session(self, client):
        assert client.post('/logout').status_code == 200

    def test_token_outlives_deleted_account(self, app, admin_client, user_client):
        response = admin_client.delete(f'/admin/user/{user_client.user_id}')
        assert response.status_code == 200
        # The token still verifies; the account behind it is gone
        assert user_client.get('/me').status_code == 404


class TestResponses:
    """Test cases for ambient response behaviour."""

    def test_security_headers(self, client):
        response = client.get('/health')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert response.headers['Cache-Control'] == 'no-store'
        assert 'Strict-Transport-Security' not in response.headers

    def test_health(self, client):
        response = client.get('/health')
        assert response.status_code == 200
        assert response.get_json() == {'status': 'ok'}

    def test_unknown_route_is_json(self, client):
        response = client.get('/does-not-exist')
        assert response.status_code == 404
        assert 'message' in response.get_json()

    def test_wrong_method_is_json(self, client):
        response = client.get('/login')
        assert response.status_code == 405
        assert 'message' in response.get_json()
