import pytest
from datetime import datetime
import os

# Force a volatile store for tests unless one was chosen explicitly
if 'STORE_BACKEND' not in os.environ:
    os.environ['STORE_BACKEND'] = 'memory'
os.environ['RESET_STORE_ON_START'] = 'false'
os.environ['SEED_ON_START'] = 'true'

from bakery import create_app
from bakery.models import ProductPatch
from bakery.services.backend import BakeryBackend
from bakery.services.product_service import upsert_product
from bakery.services.seed_service import seed_once
from bakery.services.store_service import KeyValueStore, MemoryBackend, SQLBackend


NOW = datetime(2026, 10, 18, 10, 30)


@pytest.fixture(scope='function')
def now():
    """Fixed clock for deterministic timestamps."""
    return NOW


@pytest.fixture(scope='function')
def store():
    """Empty in-memory store."""
    return KeyValueStore(MemoryBackend(), prefix='lv')


@pytest.fixture(scope='function')
def sql_store():
    """Empty SQLite in-memory store."""
    return KeyValueStore(SQLBackend('sqlite://'), prefix='lv')


@pytest.fixture(scope='function')
def seeded_store(store, now):
    """Store with the starter users and products."""
    seed_once(store, now=now)
    return store


@pytest.fixture(scope='function')
def croissant(store, now):
    """Product priced R$ 3,50 with 5 units on hand."""
    return upsert_product(store, ProductPatch(name='Croissant', price_cents=350, quantity=5, category='bread'), now=now)


@pytest.fixture(scope='function')
def brigadeiro(store, now):
    """Product priced R$ 2,00 with 30 units on hand."""
    return upsert_product(store, ProductPatch(name='Brigadeiro', price_cents=200, quantity=30, category='sweets'), now=now)


@pytest.fixture(scope='function')
def backend(seeded_store, now):
    """Backend facade over the seeded store with a frozen clock."""
    return BakeryBackend(seeded_store, clock=lambda: now)


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing (fresh memory store per test)."""
    app = create_app('config.Config')
    app.config['TESTING'] = True
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Client logged in as the seeded manager."""
    response = client.post('/auth/login', json={
        'email': 'admin@padarialv.com',
        'password': '123456'
    })
    assert response.status_code == 200
    return client
