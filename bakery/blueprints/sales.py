"""Sales blueprint - checkout and order listing."""
import logging

from flask import Blueprint, jsonify, request, Response

from bakery.exceptions import BusinessLogicError
from bakery.middleware import get_json_body, require_login
from bakery.services.backend import get_backend
from bakery.services.report_service import OrderRange
from bakery.models import PaymentMethod

logger = logging.getLogger(__name__)

sales_bp = Blueprint('sales', __name__, url_prefix='/sales')


@sales_bp.route('', methods=['POST'])
def create_sale() -> Response:
    """
    Checkout. Open to the storefront as well as the cashier panel:
    without a session the sale is recorded with cashier id 0.

    Body: {"items": [{"product_id": 1, "qty": 2}], "payment_method": "pix", "discount_cents": 0}
    """
    data = get_json_body()
    items = data.get('items')
    if not isinstance(items, list):
        raise BusinessLogicError('Carrinho vazio')

    discount = data.get('discount_cents') or 0
    if not isinstance(discount, int) or isinstance(discount, bool):
        raise BusinessLogicError('Desconto inválido')

    sale = get_backend().create_sale(
        items,
        payment_method=data.get('payment_method', ''),
        discount_cents=discount
    )
    return jsonify({'status': 'ok', 'sale': sale.model_dump(mode='json')}), 201


@sales_bp.route('', methods=['GET'])
@require_login
def list_sales() -> Response:
    """Orders board: ?q=code-or-item&method=pix&range=all|today|week, newest first."""
    method = request.args.get('method') or None
    order_range = request.args.get('range') or OrderRange.ALL.value

    if method is not None and method not in {m.value for m in PaymentMethod}:
        raise BusinessLogicError(f'Forma de pagamento inválida: {method}')
    if order_range not in {r.value for r in OrderRange}:
        raise BusinessLogicError(f'Período inválido: {order_range}')

    sales = get_backend().filter_orders(
        query=request.args.get('q', ''),
        method=method,
        order_range=order_range
    )
    return jsonify({'sales': [s.model_dump(mode='json') for s in sales]})


@sales_bp.route('/<int:sale_id>', methods=['GET'])
@require_login
def get_sale(sale_id: int) -> Response:
    sale = get_backend().get_sale(sale_id)
    return jsonify({'sale': sale.model_dump(mode='json')})
