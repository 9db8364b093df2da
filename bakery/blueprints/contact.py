"""Contact blueprint - public contact form."""
from flask import Blueprint, jsonify, Response

from bakery.middleware import get_json_body
from bakery.services.backend import get_backend

contact_bp = Blueprint('contact', __name__)


@contact_bp.route('/contact', methods=['POST'])
def send_contact() -> Response:
    data = get_json_body()
    contact = get_backend().send_contact(
        str(data.get('name') or ''),
        str(data.get('email') or ''),
        str(data.get('message') or '')
    )
    return jsonify({'status': 'ok', 'contact': contact.model_dump(mode='json')}), 201
