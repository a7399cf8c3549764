# walletpass/init/blueprints.py

"""
Blueprint Registration

Register all Flask blueprints for modular functionality.
"""

import logging

logger = logging.getLogger(__name__)


def init_blueprints(app):
    """
    Register blueprints with the Flask application.

    Args:
        app: The Flask application instance.
    """
    from walletpass.wallet_pass.routes import wallet_bp

    app.register_blueprint(wallet_bp)
    logger.debug("Registered wallet blueprint")
