"""Flask application factory."""
from flask import Flask, jsonify


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = app.config.get('JSON_SORT_KEYS', False)

    # Initialize the key-value store, seed data and backend facade
    from bakery.services.backend import init_backend
    backend = init_backend(app)

    # Sale notifications: log every committed sale
    def log_sale(sale):
        app.logger.info(f"Sale committed: #{sale.id} {sale.receipt_code} ({sale.total_cents} cents)")

    backend.subscribe_sales(log_sale)

    # Error Handlers
    from bakery.exceptions import BakeryError

    @app.errorhandler(BakeryError)
    def handle_bakery_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"BakeryError [{error.status_code}]: {error.message}")
        else:
            app.logger.warning(f"BakeryError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'message': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return jsonify({'status': 'error', 'message': 'Method Not Allowed'}), 405

    @app.errorhandler(500)
    @app.errorhandler(Exception)
    def internal_error(error):
        import traceback
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from bakery.blueprints.auth import auth_bp
    from bakery.blueprints.catalog import catalog_bp
    from bakery.blueprints.sales import sales_bp
    from bakery.blueprints.contact import contact_bp
    from bakery.blueprints.reports import reports_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(catalog_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(contact_bp)
    app.register_blueprint(reports_bp)

    # Register CLI commands
    from bakery.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"STORE_BACKEND={app.config.get('STORE_BACKEND')}")

    return app
