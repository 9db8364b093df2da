"""Models package - exports the domain models."""
from bakery.models.user import User, Role
from bakery.models.product import Product, ProductPatch, Category
from bakery.models.sale import Sale, SaleItem, PaymentMethod, normalize_payment_method
from bakery.models.contact_message import ContactMessage
from bakery.models.access_session import AccessSession

__all__ = [
    'User', 'Role',
    'Product', 'ProductPatch', 'Category',
    'Sale', 'SaleItem', 'PaymentMethod', 'normalize_payment_method',
    'ContactMessage',
    'AccessSession',
]
