# wsgi.py

import logging

from walletpass import create_app

logger = logging.getLogger(__name__)

# Create the Flask application instance
app = create_app()

if __name__ == '__main__':
    logger.info("Starting development server")
    app.run(host='0.0.0.0', port=5000)
