"""
Flask CLI commands for store management.

Commands:
- flask seed: Write the starter dataset if the store is empty
- flask reset-store: Wipe the store (and reseed unless --no-seed)
- flask closing: Print the daily closing per payment method
"""

import click
from datetime import datetime
from flask import current_app

from bakery.services.backend import get_backend
from bakery.utils.number_format import money_brl


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('seed')
    def seed():
        """Seed users and products once."""
        if get_backend().seed_once():
            click.echo(click.style('✅ Dados iniciais criados.', fg='green'))
        else:
            click.echo('Dados já existentes; nada a fazer.')

    @app.cli.command('reset-store')
    @click.option('--seed/--no-seed', default=True, help='Reseed after wiping')
    @click.confirmation_option(prompt='Apagar todos os dados da loja?')
    def reset_store(seed):
        """Remove every stored key."""
        get_backend().reset(reseed=seed)
        click.echo(click.style('✅ Loja reiniciada.', fg='green'))

    @app.cli.command('closing')
    @click.option('--date', 'day', default=None, help='Day to close (YYYY-MM-DD, default today)')
    def closing(day):
        """Print the closing summary for a day."""
        try:
            closing_day = datetime.strptime(day, '%Y-%m-%d').date() if day else None
        except ValueError:
            click.echo(click.style('❌ Data inválida. Use AAAA-MM-DD', fg='red'))
            raise SystemExit(1)

        summary = get_backend().closing_summary(closing_day)
        business_name = current_app.config.get('BUSINESS_NAME', 'Padaria LV')
        click.echo(f'{business_name}: Fechamento {summary.day.strftime("%d/%m/%Y")} ({summary.count} vendas)')
        click.echo(f'   PIX:      {money_brl(summary.pix)}')
        click.echo(f'   Cartão:   {money_brl(summary.card)}')
        click.echo(f'   Dinheiro: {money_brl(summary.cash)}')
        click.echo(f'   Total:    {money_brl(summary.total)}')
