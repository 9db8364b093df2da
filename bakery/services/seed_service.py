"""
Seed service - starter dataset for the demo store.

Safe to call on every start: the 'seeded' flag makes it a no-op after the
first run.
"""
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from bakery.models import User, Role, Product, Category

logger = logging.getLogger(__name__)

DEMO_PASSWORD = '123456'


def _starter_users() -> List[User]:
    return [
        User(id=1, name='Admin LV', email='admin@padarialv.com', roles=[Role.MANAGER], password=DEMO_PASSWORD),
        User(id=2, name='Caixa 1', email='caixa@padarialv.com', roles=[Role.CASHIER], password=DEMO_PASSWORD),
        User(id=3, name='Estoquista', email='estoque@padarialv.com', roles=[Role.STOCKIST], password=DEMO_PASSWORD),
    ]


def _starter_products(now: datetime) -> List[Product]:
    day = timedelta(days=1)
    return [
        Product(
            id=1, name='Pão Francês', description='Casquinha crocante',
            price_cents=90, quantity=200, expires_at=now + day, category=Category.BREAD,
            image_url='https://experts.nita.com.br/img/posts/9052e329ff0fc509b905a5c63f1f80325e29d29d.jpg',
            created_at=now, updated_at=now
        ),
        Product(
            id=2, name='Bolo de Cenoura', description='Cobertura de chocolate',
            price_cents=3500, quantity=10, expires_at=now + 5 * day, category=Category.CAKES,
            image_url='https://recipesblob.oetker.com.br/assets/11ed1b54a18b427ea8e7f7d141f0a34d/1272x764/bolo_cenoura_horizontal.webp',
            created_at=now, updated_at=now
        ),
        Product(
            id=3, name='Sonho', description='Recheio de creme',
            price_cents=1200, quantity=20, expires_at=now + 2 * day, category=Category.SWEETS,
            created_at=now, updated_at=now
        ),
        Product(
            id=4, name='Pão Italiano', description='Miolo macio',
            price_cents=1890, quantity=40, expires_at=now - day, category=Category.BREAD,
            image_url='https://i.panelinha.com.br/i1/bk-9294-pao-italiano-caseiro.webp',
            created_at=now, updated_at=now
        ),
    ]


def seed_once(store, now: Optional[datetime] = None) -> bool:
    """
    Write the starter users and products unless the store is already seeded.

    Returns:
        True if data was written, False if the seeded flag was already set
    """
    with store.transaction():
        if store.get('seeded', False):
            return False

        now = now or datetime.now()
        users = _starter_users()
        products = _starter_products(now)

        store.set_many({
            'users': users,
            'products': products,
            'sales': [],
            'contacts': [],
            'seeded': True,
        })

    logger.info(f"[SEED] ✓ Seeded {len(users)} users and {len(products)} products")
    return True


def reset_store(store) -> int:
    """Wipe every key of the store (the demo starts from scratch on each load)."""
    with store.transaction():
        removed = store.clear()
    logger.info(f"[SEED] Store reset ({removed} keys removed)")
    return removed
