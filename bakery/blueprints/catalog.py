"""Catalog blueprint for products management."""
import logging
from typing import Optional

from flask import Blueprint, jsonify, Response

from bakery.middleware import get_json_body, parse_bool_arg, require_login
from bakery.services.backend import get_backend
from bakery.utils.number_format import parse_localized_amount_to_cents

logger = logging.getLogger(__name__)

catalog_bp = Blueprint('catalog', __name__, url_prefix='/products')

# Localized string field -> cents field
MONEY_TEXT_FIELDS = {'price': 'price_cents', 'cost': 'cost_cents'}


def _product_payload(data: dict, product_id: Optional[int] = None) -> dict:
    """
    Normalize a product body for upsert.

    Prices may come as integer cents (price_cents) or as localized text
    typed in the editor (price: "12,50").
    """
    payload = dict(data)
    for text_field, cents_field in MONEY_TEXT_FIELDS.items():
        if text_field in payload:
            text = payload.pop(text_field)
            if cents_field not in payload:
                payload[cents_field] = None if text is None else parse_localized_amount_to_cents(str(text))
    if product_id is not None:
        payload['id'] = product_id
    else:
        payload.pop('id', None)
    return payload


@catalog_bp.route('', methods=['GET'])
def list_products() -> Response:
    """List products; ?only_active=1 for the storefront menu."""
    products = get_backend().list_products(only_active=parse_bool_arg('only_active'))
    return jsonify({'products': [p.model_dump(mode='json') for p in products]})


@catalog_bp.route('/<int:product_id>', methods=['GET'])
def get_product(product_id: int) -> Response:
    product = get_backend().get_product(product_id)
    return jsonify({'product': product.model_dump(mode='json')})


@catalog_bp.route('', methods=['POST'])
@require_login
def create_product() -> Response:
    product = get_backend().upsert_product(_product_payload(get_json_body()))
    return jsonify({'status': 'ok', 'product': product.model_dump(mode='json')}), 201


@catalog_bp.route('/<int:product_id>', methods=['PUT', 'PATCH'])
@require_login
def update_product(product_id: int) -> Response:
    backend = get_backend()
    # Raises ProductNotFoundError instead of silently creating a new product
    backend.get_product(product_id)
    product = backend.upsert_product(_product_payload(get_json_body(), product_id))
    return jsonify({'status': 'ok', 'product': product.model_dump(mode='json')})


@catalog_bp.route('/<int:product_id>', methods=['DELETE'])
@require_login
def delete_product(product_id: int) -> Response:
    get_backend().delete_product(product_id)
    return jsonify({'status': 'ok'})
