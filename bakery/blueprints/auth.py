"""
Authentication blueprint.
Handles login, logout and the current session user.
"""
import logging

from flask import Blueprint, jsonify, Response

from bakery.exceptions import BusinessLogicError
from bakery.middleware import get_json_body, require_login
from bakery.services.backend import get_backend

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/auth/login', methods=['POST'])
def login() -> Response:
    """Validate email + password and open the store session."""
    data = get_json_body()
    email = str(data.get('email', '')).strip()
    password = str(data.get('password', ''))

    if not email or not password:
        raise BusinessLogicError('E-mail e senha são obrigatórios.')

    user = get_backend().login(email, password)
    return jsonify({'status': 'ok', 'user': user.public_dict()})


@auth_bp.route('/auth/logout', methods=['POST'])
def logout() -> Response:
    get_backend().logout()
    return jsonify({'status': 'ok', 'message': 'Sessão encerrada.'})


@auth_bp.route('/auth/me', methods=['GET'])
def me() -> Response:
    """Current user, or null when nobody is logged in."""
    user = get_backend().current_user()
    return jsonify({'user': user.public_dict() if user else None})


@auth_bp.route('/users', methods=['GET'])
@require_login
def list_users() -> Response:
    users = get_backend().list_users()
    return jsonify({'users': [u.public_dict() for u in users]})
