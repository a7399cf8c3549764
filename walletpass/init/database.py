# walletpass/init/database.py

"""
Database Initialization

Initialize SQLAlchemy and register the models used by the issuance flow.
"""

import logging

logger = logging.getLogger(__name__)


def init_database(app, db):
    """
    Initialize database for the Flask application.

    Args:
        app: The Flask application instance.
        db: The SQLAlchemy db instance.
    """
    if not app.config.get('SQLALCHEMY_DATABASE_URI'):
        raise RuntimeError('DATABASE_URL must be set')

    db.init_app(app)

    # Import models so they are registered on the metadata
    from walletpass.models import User  # noqa: F401

    logger.debug("Database initialized")
