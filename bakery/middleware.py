"""Request helpers shared by the blueprints."""
from functools import wraps

from flask import g, request

from bakery.exceptions import BusinessLogicError, UnauthorizedError
from bakery.services.backend import get_backend


def require_login(f):
    """
    Decorator: Require a logged-in staff user.

    Resolves the store's current session and exposes the user as ``g.user``.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        user = get_backend().current_user()
        if user is None:
            raise UnauthorizedError()
        g.user = user
        return f(*args, **kwargs)
    return decorated_function


def get_json_body() -> dict:
    """JSON object body of the request, or {} when there is none."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BusinessLogicError('O corpo da requisição deve ser um objeto JSON')
    return data


def parse_bool_arg(name: str, default: bool = False) -> bool:
    value = request.args.get(name)
    if value is None:
        return default
    return value.lower() in ('1', 'true', 'yes', 'on')
