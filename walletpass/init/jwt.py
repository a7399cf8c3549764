# walletpass/init/jwt.py

"""
JWT Initialization

Initialize Flask-JWT-Extended, used to verify the session tokens issued by
the authentication service.
"""

import logging

logger = logging.getLogger(__name__)


def init_jwt(app):
    """
    Initialize JWT for session verification.

    Args:
        app: The Flask application instance.

    Returns:
        The JWTManager instance.
    """
    from flask_jwt_extended import JWTManager

    if not app.config.get('JWT_SECRET_KEY'):
        raise RuntimeError('JWT_SECRET_KEY must be set')

    jwt = JWTManager(app)
    return jwt
