"""
Google Wallet Pass Module

Issues HackWestern attendee passes through the Google Wallet Objects API and
signs the Add to Google Wallet links for them.
"""

from .config import IssuerSettings, PassContent, load_issuer_settings
from .errors import WalletIssuanceError
from .issuance import IssuanceService, WalletIssuer, get_wallet_issuer

__all__ = [
    'IssuerSettings',
    'PassContent',
    'load_issuer_settings',
    'WalletIssuanceError',
    'IssuanceService',
    'WalletIssuer',
    'get_wallet_issuer',
]
