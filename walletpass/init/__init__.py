# walletpass/init/__init__.py

"""
Application Initialization Package

This package contains modular initialization functions for the Flask application.
Each module handles a specific aspect of application setup.
"""

from walletpass.init.logging import init_logging
from walletpass.init.database import init_database
from walletpass.init.jwt import init_jwt
from walletpass.init.wallet import init_wallet
from walletpass.init.blueprints import init_blueprints
from walletpass.init.error_handlers import install_error_handlers
from walletpass.init.cli import init_cli_commands

__all__ = [
    'init_logging',
    'init_database',
    'init_jwt',
    'init_wallet',
    'init_blueprints',
    'install_error_handlers',
    'init_cli_commands',
]
