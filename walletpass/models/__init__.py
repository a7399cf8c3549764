# walletpass/models/__init__.py

from walletpass.models.core import User

__all__ = ['User']
