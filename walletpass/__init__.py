# walletpass/__init__.py

"""
Flask Application Factory

This module provides the create_app function to initialize and configure the Flask
application. The initialization is split across the walletpass/init/ package.
"""

import logging
from flask import Flask

from walletpass.core import db

logger = logging.getLogger(__name__)


def create_app(config_object='web_config.Config'):
    """
    Application factory function for creating a Flask app instance.

    Loads configuration from the specified config object, sets up logging,
    SQLAlchemy, JWT session verification and the wallet issuer, and registers
    blueprints, error handlers and CLI commands.

    Args:
        config_object: The configuration object to load (default is 'web_config.Config').

    Returns:
        A configured Flask application instance.
    """
    app = Flask(__name__)
    app.config.from_object(config_object)

    # SECRET_KEY is mandatory
    if not app.config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY must be set')

    from walletpass.init import (
        init_logging,
        init_database,
        init_jwt,
        init_wallet,
        init_blueprints,
        install_error_handlers,
        init_cli_commands,
    )

    # Phase 1: Core setup
    init_logging(app)
    init_database(app, db)

    # Phase 2: Authentication & wallet issuer
    init_jwt(app)
    init_wallet(app)

    # Phase 3: Blueprints and routes
    init_blueprints(app)
    install_error_handlers(app)

    # Phase 4: CLI
    init_cli_commands(app)

    return app


__all__ = [
    'create_app',
    'db',
]
