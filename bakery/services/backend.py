"""
Bakery backend facade.

Bundles one store handle with the sale notifier and exposes every operation
the presentation layer may call. The service modules stay plain functions
taking the store explicitly; this class only wires them together.
"""
import logging
from datetime import date, datetime
from typing import Callable, List, Optional

from flask import Flask, current_app

from bakery.models import ContactMessage, Product, Sale, User
from bakery.services import auth_service, contact_service, product_service, report_service, sales_service
from bakery.services.notification_service import SaleNotifier
from bakery.services.seed_service import reset_store, seed_once
from bakery.services.store_service import KeyValueStore, build_store

logger = logging.getLogger(__name__)


class BakeryBackend:
    """Simulated backend over an injected KeyValueStore."""

    def __init__(self, store: KeyValueStore, receipt_prefix: str = 'LV',
                 expiring_soon_days: int = report_service.EXPIRING_SOON_DAYS,
                 clock: Callable[[], datetime] = datetime.now):
        self.store = store
        self.notifier = SaleNotifier()
        self.receipt_prefix = receipt_prefix
        self.expiring_soon_days = expiring_soon_days
        self._clock = clock

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self.now().date()

    # Lifecycle
    def seed_once(self) -> bool:
        return seed_once(self.store, now=self.now())

    def reset(self, reseed: bool = True) -> None:
        reset_store(self.store)
        if reseed:
            self.seed_once()

    # Auth
    def login(self, email: str, password: str) -> User:
        return auth_service.login(self.store, email, password, now=self.now())

    def logout(self) -> None:
        auth_service.logout(self.store)

    def current_user(self) -> Optional[User]:
        return auth_service.current_user(self.store)

    def list_users(self) -> List[User]:
        return auth_service.list_users(self.store)

    # Products
    def list_products(self, only_active: bool = False) -> List[Product]:
        return product_service.list_products(self.store, only_active=only_active)

    def get_product(self, product_id: int) -> Product:
        return product_service.get_product(self.store, product_id)

    def upsert_product(self, data) -> Product:
        return product_service.upsert_product(self.store, data, now=self.now())

    def delete_product(self, product_id: int) -> None:
        product_service.delete_product(self.store, product_id)

    # Sales
    def create_sale(self, items, payment_method, discount_cents: int = 0) -> Sale:
        return sales_service.create_sale(
            self.store, items, payment_method,
            discount_cents=discount_cents,
            notifier=self.notifier,
            now=self.now(),
            receipt_prefix=self.receipt_prefix
        )

    def list_sales(self) -> List[Sale]:
        return sales_service.list_sales(self.store)

    def get_sale(self, sale_id: int) -> Sale:
        return sales_service.get_sale(self.store, sale_id)

    def subscribe_sales(self, listener: Callable[[Sale], None]) -> Callable[[], None]:
        """Call ``listener`` with every sale created from now on. Returns the unsubscribe function."""
        return self.notifier.subscribe(listener)

    # Contact
    def send_contact(self, name: str, email: str, message: str) -> ContactMessage:
        return contact_service.send_contact(self.store, name, email, message, now=self.now())

    def list_contacts(self) -> List[ContactMessage]:
        return contact_service.list_contacts(self.store)

    # Reports
    def dashboard_summary(self) -> dict:
        return report_service.dashboard_summary(
            self.list_products(), self.list_sales(), self.today(),
            soon_days=self.expiring_soon_days
        )

    def orders_summary(self) -> dict:
        return report_service.orders_summary(self.list_sales(), self.today())

    def filter_orders(self, query: str = '', method=None, order_range='all') -> List[Sale]:
        return report_service.filter_orders(
            self.list_sales(), self.list_products(),
            query=query, method=method, order_range=order_range, now=self.now()
        )

    def closing_summary(self, day: Optional[date] = None) -> report_service.ClosingSummary:
        return report_service.closing_summary(self.list_sales(), day or self.today())

    def expiration_status(self, product: Product) -> report_service.ExpirationStatus:
        return report_service.expiration_status(product, self.today(), self.expiring_soon_days)


def init_backend(app: Flask) -> BakeryBackend:
    """Build the store from app config, prepare its data and attach the backend to the app."""
    store = build_store(app.config)
    backend = BakeryBackend(
        store,
        receipt_prefix=app.config.get('RECEIPT_PREFIX', 'LV'),
        expiring_soon_days=app.config.get('EXPIRING_SOON_DAYS', report_service.EXPIRING_SOON_DAYS)
    )

    if app.config.get('RESET_STORE_ON_START', False):
        reset_store(store)
    if app.config.get('SEED_ON_START', True):
        backend.seed_once()

    if not hasattr(app, 'extensions'):
        app.extensions = {}
    app.extensions['backend'] = backend
    return backend


def get_backend() -> BakeryBackend:
    """Backend of the current Flask app."""
    backend = current_app.extensions.get('backend')
    if backend is None:
        raise RuntimeError("Backend not initialized.")
    return backend
