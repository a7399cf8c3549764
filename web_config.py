"""
Web Configuration Module

This module defines the configuration settings for the Flask application,
including database, JWT session and Google Wallet issuer settings.
Values are loaded primarily from environment variables.
"""

from datetime import timedelta
import os


class Config:
    """Application configuration settings."""
    # Basic Flask/App Configuration
    SECRET_KEY = os.getenv('SECRET_KEY')
    APP_URL = os.getenv('APP_URL')

    # Database Configuration
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': int(os.getenv('SQLALCHEMY_POOL_RECYCLE', 1800)),
    }

    # JWT Configuration (session tokens issued by the auth service)
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY')
    JWT_TOKEN_LOCATION = ['headers', 'cookies']
    JWT_ACCESS_COOKIE_NAME = os.getenv('JWT_ACCESS_COOKIE_NAME', 'session_token')
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=1)

    # Google Wallet issuer configuration
    GOOGLE_WALLET_ISSUER_ID = os.getenv('GOOGLE_WALLET_ISSUER_ID')
    GOOGLE_WALLET_CLASS_SUFFIX = os.getenv('GOOGLE_WALLET_CLASS_SUFFIX', 'HackWesternUserPass')
    WALLET_SERVICE_ACCOUNT_EMAIL = os.getenv('WALLET_SERVICE_ACCOUNT_EMAIL')
    GOOGLE_APPLICATION_CREDENTIALS = os.getenv('GOOGLE_APPLICATION_CREDENTIALS')
    # Comma-separated list of origins allowed to render the save button
    WALLET_ORIGINS = os.getenv('WALLET_ORIGINS', '')
    # Seconds; parsed and validated when the issuer settings are loaded
    WALLET_API_TIMEOUT = os.getenv('WALLET_API_TIMEOUT', '10')
    # Refuse to start when wallet settings are invalid
    WALLET_FAIL_FAST = os.getenv('WALLET_FAIL_FAST', 'false').lower() == 'true'

    # Pass content
    WALLET_ISSUER_NAME = os.getenv('WALLET_ISSUER_NAME', 'HackWestern')
    WALLET_PASS_HEADER = os.getenv('WALLET_PASS_HEADER', 'HackWestern Attendee')
    WALLET_PASS_SUBHEADER = os.getenv('WALLET_PASS_SUBHEADER', 'User Badge')
    WALLET_LOGO_URI = os.getenv(
        'WALLET_LOGO_URI',
        'https://raw.githubusercontent.com/HackWestern/hackwestern.com/main/public/logo-filled.png'
    )
    WALLET_HERO_IMAGE_URI = os.getenv(
        'WALLET_HERO_IMAGE_URI',
        'https://images.unsplash.com/photo-1504805572947-34fad45a28aa?q=80&w=2070&auto=format&fit=crop'
    )
    WALLET_BACKGROUND_COLOR = os.getenv('WALLET_BACKGROUND_COLOR', '#800020')
    WALLET_LINK_URI = os.getenv('WALLET_LINK_URI', 'https://hackwestern.com')

    # Logging
    LOG_TO_FILE = os.getenv('LOG_TO_FILE', 'true').lower() == 'true'


class TestingConfig(Config):
    """Testing configuration settings."""
    TESTING = True

    # Use in-memory SQLite for testing
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': False,  # Not needed for SQLite
        'echo': False
    }

    # Test secrets
    SECRET_KEY = 'test-secret-key-for-testing'
    JWT_SECRET_KEY = 'test-jwt-secret-for-testing'

    APP_URL = 'http://localhost:3000'
    GOOGLE_WALLET_ISSUER_ID = 'ISSUER123'
    GOOGLE_WALLET_CLASS_SUFFIX = 'HackWesternUserPass'
    WALLET_SERVICE_ACCOUNT_EMAIL = 'wallet@test-project.iam.gserviceaccount.com'
    # Tests install their own key file through the app fixture
    GOOGLE_APPLICATION_CREDENTIALS = None
    WALLET_ORIGINS = 'http://localhost:3000'
    WALLET_FAIL_FAST = False

    # Disable file logging for tests to avoid permission issues
    LOG_TO_FILE = False
