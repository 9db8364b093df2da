"""
Authentication service.

Handles login, logout and resolution of the single current session. There is
one session record for the whole store: the last login wins.
"""
import base64
import logging
from datetime import datetime
from typing import List, Optional

from bakery.exceptions import InvalidCredentialsError
from bakery.models import AccessSession, User

logger = logging.getLogger(__name__)

USERS_KEY = 'users'
SESSION_KEY = 'session'


def list_users(store) -> List[User]:
    """All staff users as stored."""
    return store.get(USERS_KEY, [], model=List[User])


def _make_token(user_id: int, issued_ms: int) -> str:
    raw = f"{user_id}:{issued_ms}".encode('utf-8')
    return base64.urlsafe_b64encode(raw).decode('ascii')


def login(store, email: str, password: str, now: Optional[datetime] = None) -> User:
    """
    Authenticate by exact email and password match.

    Returns:
        User: the authenticated user

    Raises:
        InvalidCredentialsError: no active user matches both fields
    """
    users = list_users(store)
    user = next(
        (u for u in users if u.email == email and u.password == password and u.is_active),
        None
    )
    if user is None:
        logger.warning(f"[AUTH] Failed login for {email!r}")
        raise InvalidCredentialsError()

    issued_ms = int((now or datetime.now()).timestamp() * 1000)
    access = AccessSession(token=_make_token(user.id, issued_ms), user_id=user.id, at=issued_ms)
    store.set(SESSION_KEY, access)

    logger.info(f"[AUTH] Login: user_id={user.id}")
    return user


def logout(store) -> None:
    """Drop the current session. Logging out twice is fine."""
    store.remove(SESSION_KEY)


def get_session(store) -> Optional[AccessSession]:
    return store.get(SESSION_KEY, None, model=AccessSession)


def current_user(store) -> Optional[User]:
    """
    Resolve the session's user.

    A user deactivated after logging in no longer resolves: the active flag
    is checked on every call, not only at login.
    """
    access = get_session(store)
    if access is None:
        return None

    for user in list_users(store):
        if user.id == access.user_id:
            return user if user.is_active else None
    return None
