# walletpass/wallet_pass/routes.py

"""
Wallet Pass API Routes

POST /api/wallet/create-pass issues a Google Wallet pass for the signed-in
user and returns the Add to Google Wallet link. No request body is read; all
pass content comes from the session and the issuer configuration.
"""

import logging
from flask import Blueprint, jsonify

from .errors import WalletIssuanceError
from .issuance import get_wallet_issuer

logger = logging.getLogger(__name__)

wallet_bp = Blueprint('wallet', __name__, url_prefix='/api/wallet')


def error_response(error: WalletIssuanceError):
    return jsonify(error.to_dict()), error.http_status


# Routing answers every other method, OPTIONS included, with 405 and `Allow: POST`
@wallet_bp.route('/create-pass', methods=['POST'], provide_automatic_options=False)
def create_pass():
    """
    Issue a wallet pass for the current session.

    Returns:
        200 {"saveToWalletUrl": ...} on success, otherwise
        {"error", "code"[, "message"]} with 401/404/500.
    """
    try:
        service = get_wallet_issuer().create_service()
        result = service.issue()
    except WalletIssuanceError as e:
        if e.stage is None:
            logger.error(f"Pass issuance refused: {e.message}")
        return error_response(e)

    return jsonify({'saveToWalletUrl': result.save_url}), 200
