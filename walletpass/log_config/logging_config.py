# walletpass/log_config/logging_config.py

"""
Logging configuration for the application.

This configuration is used to initialize Python's logging module with a
dictionary-based setup. It defines formatters, handlers, and loggers for
the issuance flow, authentication and the HTTP layer.

Uses RotatingFileHandler to automatically manage log file sizes and prevent
unlimited growth.
"""

import copy
import logging.handlers

LOG_DIR = 'logs'

LOGGING_CONFIG = {
    'version': 1,
    'disable_existing_loggers': False,

    # Formatters define the layout of the log messages.
    'formatters': {
        'detailed': {
            'format': '%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s'
        },
        'simple': {
            'format': '%(asctime)s [%(levelname)s] %(message)s'
        },
        'focused': {
            'format': '%(asctime)s [%(levelname)s] %(name)s - %(message)s'
        }
    },

    # Handlers specify where log messages are sent (e.g., console, files).
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'focused',
            'level': 'INFO',
        },
        'wallet_file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': f'{LOG_DIR}/wallet.log',
            'formatter': 'detailed',
            'level': 'INFO',
            'maxBytes': 10485760,   # 10MB
            'backupCount': 3,
            'encoding': 'utf-8'
        },
        'errors_file': {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': f'{LOG_DIR}/errors.log',
            'formatter': 'detailed',
            'level': 'WARNING',
            'maxBytes': 26214400,   # 25MB
            'backupCount': 3,
            'encoding': 'utf-8'
        }
    },

    # Loggers define logging behavior for specific modules or components.
    'loggers': {
        'walletpass.wallet_pass': {
            'handlers': ['console', 'wallet_file', 'errors_file'],
            'level': 'INFO',
            'propagate': False
        },
        'walletpass.init': {
            'handlers': ['console', 'errors_file'],
            'level': 'INFO',
            'propagate': False
        },
        'sqlalchemy.engine': {
            'handlers': ['errors_file'],
            'level': 'ERROR',       # Only log serious SQL errors
            'propagate': False
        },
        'werkzeug': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False
        },
        'urllib3': {
            'handlers': ['console'],
            'level': 'WARNING',
            'propagate': False
        }
    },

    # The root logger catches all messages not handled by other loggers.
    'root': {
        'handlers': ['console', 'errors_file'],
        'level': 'WARNING',
    }
}


def console_only_config():
    """Return a copy of LOGGING_CONFIG with every file handler removed."""
    config = copy.deepcopy(LOGGING_CONFIG)
    file_handlers = {
        name for name, handler in config['handlers'].items()
        if handler['class'] != 'logging.StreamHandler'
    }
    for name in file_handlers:
        del config['handlers'][name]
    for logger_config in list(config['loggers'].values()) + [config['root']]:
        logger_config['handlers'] = [h for h in logger_config['handlers'] if h not in file_handlers]
    return config
