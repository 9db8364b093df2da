"""Reports blueprint - dashboard, orders board and daily closing."""
from datetime import date

from flask import Blueprint, jsonify, request, Response

from bakery.exceptions import BusinessLogicError
from bakery.middleware import require_login
from bakery.services.backend import get_backend

reports_bp = Blueprint('reports', __name__, url_prefix='/reports')


@reports_bp.route('/dashboard', methods=['GET'])
@require_login
def dashboard() -> Response:
    return jsonify(get_backend().dashboard_summary())


@reports_bp.route('/orders', methods=['GET'])
@require_login
def orders() -> Response:
    return jsonify(get_backend().orders_summary())


@reports_bp.route('/closing', methods=['GET'])
@require_login
def closing() -> Response:
    """Closing for ?date=YYYY-MM-DD (defaults to today)."""
    day = None
    raw_date = request.args.get('date')
    if raw_date:
        try:
            day = date.fromisoformat(raw_date)
        except ValueError:
            raise BusinessLogicError('Data inválida. Use AAAA-MM-DD')

    summary = get_backend().closing_summary(day)
    return jsonify(summary.to_dict())
