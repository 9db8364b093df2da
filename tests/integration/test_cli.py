"""
Integration tests for the Flask CLI commands.
"""

from bakery.services.backend import get_backend


class TestCliCommands:

    def test_seed_is_idempotent(self, app):
        runner = app.test_cli_runner()
        result = runner.invoke(args=['seed'])

        assert result.exit_code == 0
        assert 'nada a fazer' in result.output

    def test_reset_store_reseeds(self, app, client):
        client.post('/sales', json={'items': [{'product_id': 1, 'qty': 5}], 'payment_method': 'cash'})

        result = app.test_cli_runner().invoke(args=['reset-store', '--yes'])
        assert result.exit_code == 0

        with app.app_context():
            backend = get_backend()
            assert backend.list_sales() == []
            assert backend.get_product(1).quantity == 200

    def test_reset_store_without_seed(self, app):
        result = app.test_cli_runner().invoke(args=['reset-store', '--no-seed', '--yes'])
        assert result.exit_code == 0

        with app.app_context():
            assert get_backend().list_products() == []

    def test_reset_store_needs_confirmation(self, app):
        result = app.test_cli_runner().invoke(args=['reset-store'], input='n\n')
        assert result.exit_code != 0

        with app.app_context():
            assert len(get_backend().list_products()) == 4

    def test_closing(self, app, client):
        client.post('/sales', json={'items': [{'product_id': 2, 'qty': 1}], 'payment_method': 'pix'})

        result = app.test_cli_runner().invoke(args=['closing'])

        assert result.exit_code == 0
        assert '(1 vendas)' in result.output
        assert 'R$ 35,00' in result.output

    def test_closing_invalid_date(self, app):
        result = app.test_cli_runner().invoke(args=['closing', '--date', 'ontem'])
        assert result.exit_code == 1
        assert 'Data inválida' in result.output
