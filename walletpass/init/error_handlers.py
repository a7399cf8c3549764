# walletpass/init/error_handlers.py

"""
Error Handlers

HTTP error handlers and exception handling.
Provides secure error responses that don't leak sensitive information.
"""

import logging

from flask import request, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)

# Safe error messages for production (don't leak internal details)
SAFE_ERROR_MESSAGES = {
    400: 'Bad Request',
    401: 'Unauthorized',
    403: 'Forbidden',
    404: 'Not Found',
    405: 'Method Not Allowed',
    408: 'Request Timeout',
    409: 'Conflict',
    413: 'Request Too Large',
    415: 'Unsupported Media Type',
    422: 'Unprocessable Entity',
    429: 'Too Many Requests',
    500: 'Internal Server Error',
    502: 'Bad Gateway',
    503: 'Service Unavailable',
    504: 'Gateway Timeout',
}


def _is_api_request():
    """Check if the current request expects a JSON response."""
    return (
        request.path.startswith('/api/') or
        request.headers.get('Accept', '').startswith('application/json') or
        request.content_type == 'application/json'
    )


def _get_safe_error_message(status_code, default='An error occurred'):
    """Get a safe error message that doesn't expose internal details."""
    return SAFE_ERROR_MESSAGES.get(status_code, default)


def install_error_handlers(app):
    """
    Install custom error handlers with the Flask application.

    Args:
        app: The Flask application instance.
    """

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        """Render HTTP errors as JSON on API paths."""
        if not _is_api_request() or error.code is None or error.code < 400:
            return error

        response = jsonify({'error': _get_safe_error_message(error.code)})
        response.status_code = error.code
        # Keep headers such as Allow and Retry-After
        for name, value in error.get_headers():
            if name.lower() != 'content-type':
                response.headers[name] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        """Handle unexpected exceptions with secure error messages."""
        # Log the full error internally (not exposed to user)
        logger.error(f"Unhandled Exception: {error}", exc_info=True)

        if _is_api_request():
            return jsonify({
                'error': 'Internal Server Error',
                'message': 'An unknown error occurred',
            }), 500

        return "Internal Server Error", 500, {'Content-Type': 'text/plain'}
