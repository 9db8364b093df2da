"""
Unit tests for the seed service.
"""

from bakery.services.seed_service import reset_store, seed_once
from bakery.services.auth_service import list_users
from bakery.services.product_service import list_products


class TestSeedOnce:

    def test_first_call_writes_starter_data(self, store, now):
        assert seed_once(store, now=now) is True

        users = list_users(store)
        products = list_products(store)
        assert [u.email for u in users] == [
            'admin@padarialv.com', 'caixa@padarialv.com', 'estoque@padarialv.com'
        ]
        assert [p.name for p in products] == ['Pão Francês', 'Bolo de Cenoura', 'Sonho', 'Pão Italiano']
        assert store.get('sales') == []
        assert store.get('contacts') == []
        assert store.get('seeded') is True

    def test_second_call_is_a_noop(self, store, now):
        seed_once(store, now=now)
        snapshot = {key: store.get(key) for key in ('users', 'products', 'sales', 'contacts')}

        assert seed_once(store) is False
        assert {key: store.get(key) for key in ('users', 'products', 'sales', 'contacts')} == snapshot

    def test_does_not_overwrite_changes_made_after_seeding(self, store, now):
        seed_once(store, now=now)
        store.set('sales', [{'id': 99}])

        seed_once(store, now=now)
        assert store.get('sales') == [{'id': 99}]

    def test_reset_allows_reseeding(self, seeded_store, now):
        seeded_store.set('products', [])

        reset_store(seeded_store)
        assert seeded_store.get('seeded', False) is False

        assert seed_once(seeded_store, now=now) is True
        assert len(list_products(seeded_store)) == 4
