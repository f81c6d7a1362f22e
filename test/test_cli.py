"""
Test cases for the create-admin command.
"""
from conftest import ALICE, login, register


class TestCreateAdminCommand:
    """Test cases for seeding admin accounts."""

    def test_creates_admin(self, app, client):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-admin', '--username', 'root', '--email', 'Root@Example.com', '--password', 'rootpass',
        ])
        assert result.exit_code == 0, result.output
        assert 'Created admin root <root@example.com>' in result.output

        response = login(client, 'root@example.com', 'rootpass')
        assert response.status_code == 200
        assert response.get_json()['role'] == 'admin'

    def test_promotes_existing_account(self, app, client):
        register(client, **ALICE)
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-admin', '--username', 'ignored', '--email', ALICE['email'], '--password', 'whatever',
        ])
        assert result.exit_code == 0, result.output
        assert 'Promoted admin alice' in result.output
        # The password is left untouched on promotion
        assert login(client, ALICE['email'], ALICE['password']).get_json()['role'] == 'admin'

    def test_rejects_short_password(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-admin', '--username', 'root', '--email', 'root@example.com', '--password', '123',
        ])
        assert result.exit_code != 0

    def test_rejects_invalid_email(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=[
            'create-admin', '--username', 'root', '--email', 'not-an-email', '--password', 'rootpass',
        ])
        assert result.exit_code != 0
