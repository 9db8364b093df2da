"""
Unit tests for authentication and session resolution.
"""

import base64
import pytest

from bakery.exceptions import InvalidCredentialsError
from bakery.services import auth_service


class TestLogin:

    def test_valid_credentials(self, seeded_store, now):
        user = auth_service.login(seeded_store, 'caixa@padarialv.com', '123456', now=now)
        assert user.id == 2

        session = auth_service.get_session(seeded_store)
        assert session.user_id == 2
        assert session.at == int(now.timestamp() * 1000)
        assert base64.urlsafe_b64decode(session.token).decode() == f"2:{session.at}"

    def test_wrong_password(self, seeded_store):
        with pytest.raises(InvalidCredentialsError):
            auth_service.login(seeded_store, 'admin@padarialv.com', 'errada')
        assert auth_service.get_session(seeded_store) is None

    def test_email_must_match_exactly(self, seeded_store):
        with pytest.raises(InvalidCredentialsError):
            auth_service.login(seeded_store, 'ADMIN@padarialv.com', '123456')

    def test_inactive_user_cannot_login(self, seeded_store):
        users = auth_service.list_users(seeded_store)
        users[0] = users[0].model_copy(update={'is_active': False})
        seeded_store.set('users', users)

        with pytest.raises(InvalidCredentialsError):
            auth_service.login(seeded_store, 'admin@padarialv.com', '123456')

    def test_last_login_wins(self, seeded_store):
        auth_service.login(seeded_store, 'admin@padarialv.com', '123456')
        auth_service.login(seeded_store, 'estoque@padarialv.com', '123456')
        assert auth_service.current_user(seeded_store).id == 3

    def test_invalid_credentials_status(self):
        assert InvalidCredentialsError().status_code == 401


class TestCurrentUser:

    def test_no_session(self, seeded_store):
        assert auth_service.current_user(seeded_store) is None

    def test_login_then_logout(self, seeded_store):
        auth_service.login(seeded_store, 'admin@padarialv.com', '123456')
        assert auth_service.current_user(seeded_store).email == 'admin@padarialv.com'

        auth_service.logout(seeded_store)
        assert auth_service.current_user(seeded_store) is None

    def test_logout_twice(self, seeded_store):
        auth_service.logout(seeded_store)
        auth_service.logout(seeded_store)
        assert auth_service.current_user(seeded_store) is None

    def test_deactivated_user_session_does_not_resolve(self, seeded_store):
        auth_service.login(seeded_store, 'admin@padarialv.com', '123456')
        users = auth_service.list_users(seeded_store)
        users[0] = users[0].model_copy(update={'is_active': False})
        seeded_store.set('users', users)

        assert auth_service.current_user(seeded_store) is None

    def test_removed_user_session_does_not_resolve(self, seeded_store):
        auth_service.login(seeded_store, 'admin@padarialv.com', '123456')
        seeded_store.set('users', auth_service.list_users(seeded_store)[1:])

        assert auth_service.current_user(seeded_store) is None
