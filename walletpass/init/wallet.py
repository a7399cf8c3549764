# walletpass/init/wallet.py

"""
Wallet Issuer Initialization

Load the Google Wallet issuer settings and service account key once, at
application start. When they are invalid the issuance endpoint fails closed;
with WALLET_FAIL_FAST the application refuses to start instead.
"""

import logging

logger = logging.getLogger(__name__)


def init_wallet(app, client=None, profile_store=None, clock=None):
    """
    Initialize the wallet issuer for the Flask application.

    Args:
        app: The Flask application instance.
        client: Optional Wallet Objects API client (defaults to one built from settings).
        profile_store: Optional profile store (defaults to the users table).
        clock: Optional millisecond clock used for object ids.

    Returns:
        The registered WalletIssuer.
    """
    from walletpass.wallet_pass.config import load_issuer_settings
    from walletpass.wallet_pass.errors import ConfigurationError
    from walletpass.wallet_pass.issuance import EXTENSION_KEY, WalletIssuer
    from walletpass.wallet_pass.upsert import current_millis

    try:
        settings = load_issuer_settings(app.config)
        issuer = WalletIssuer.from_settings(
            settings,
            client=client,
            profile_store=profile_store,
            clock=clock or current_millis,
        )
    except ConfigurationError as e:
        logger.error(f"Google Wallet issuer disabled: {e.message}")
        if app.config.get('WALLET_FAIL_FAST'):
            raise RuntimeError(f"Google Wallet configuration errors: {e.message}") from e
        issuer = WalletIssuer.unavailable(e)
    else:
        logger.info(f"Google Wallet issuer ready (class {settings.class_id})")

    app.extensions[EXTENSION_KEY] = issuer
    return issuer
