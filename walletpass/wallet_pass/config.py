# walletpass/wallet_pass/config.py

"""
Google Wallet Issuer Settings

Builds the immutable settings used by the issuance flow from the Flask
configuration. Loading happens once, during application start; the service
account key file is read and its private key parsed here so that request
handling never touches the filesystem or the environment.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from cryptography.hazmat.primitives.asymmetric import rsa

from .errors import ConfigurationError, SigningKeyUnavailable
from .signer import load_private_key

logger = logging.getLogger(__name__)

DEFAULT_CLASS_SUFFIX = 'HackWesternUserPass'
DEFAULT_API_TIMEOUT = 10.0


@dataclass(frozen=True)
class PassContent:
    """Static visual content shared by every pass object of the deployment."""
    issuer_name: str = 'HackWestern'
    header: str = 'HackWestern Attendee'
    subheader: str = 'User Badge'
    logo_uri: str = 'https://raw.githubusercontent.com/HackWestern/hackwestern.com/main/public/logo-filled.png'
    hero_image_uri: Optional[str] = (
        'https://images.unsplash.com/photo-1504805572947-34fad45a28aa?q=80&w=2070&auto=format&fit=crop'
    )
    background_color: str = '#800020'
    link_uri: Optional[str] = 'https://hackwestern.com'


@dataclass(frozen=True)
class IssuerSettings:
    """Everything the issuance flow needs, validated at load time."""
    issuer_id: str
    class_suffix: str
    service_account_email: str
    credentials_path: str
    origins: Tuple[str, ...]
    private_key: rsa.RSAPrivateKey = field(repr=False)
    service_account_info: Dict[str, Any] = field(repr=False)
    api_timeout: float = DEFAULT_API_TIMEOUT
    content: PassContent = field(default_factory=PassContent)

    @property
    def class_id(self) -> str:
        return f"{self.issuer_id}.{self.class_suffix}"


def parse_origins(value) -> Tuple[str, ...]:
    """Accept a comma-separated string or an iterable of origins."""
    if not value:
        return ()
    if isinstance(value, str):
        value = value.split(',')
    return tuple(origin.strip().rstrip('/') for origin in value if origin and origin.strip())


def load_service_account_key(path: str) -> Dict[str, Any]:
    """
    Read a service account JSON key file.

    Raises:
        SigningKeyUnavailable: if the file cannot be read or is not valid JSON.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            info = json.load(f)
    except OSError as e:
        raise SigningKeyUnavailable(f'Service account key file not readable at {path}: {e}') from e
    except ValueError as e:
        raise SigningKeyUnavailable(f'Service account key file at {path} is not valid JSON: {e}') from e

    if not isinstance(info, dict):
        raise SigningKeyUnavailable(f'Service account key file at {path} is not a JSON object')
    return info


def load_issuer_settings(config: Mapping[str, Any]) -> IssuerSettings:
    """
    Build IssuerSettings from a Flask config mapping.

    Args:
        config: The Flask app.config (or any mapping with the same keys).

    Returns:
        Validated, immutable IssuerSettings.

    Raises:
        ConfigurationError: listing every missing setting.
        SigningKeyUnavailable: if the key file or its private key is unusable.
    """
    issuer_id = (config.get('GOOGLE_WALLET_ISSUER_ID') or '').strip()
    class_suffix = (config.get('GOOGLE_WALLET_CLASS_SUFFIX') or DEFAULT_CLASS_SUFFIX).strip()
    service_account_email = (config.get('WALLET_SERVICE_ACCOUNT_EMAIL') or '').strip()
    credentials_path = config.get('GOOGLE_APPLICATION_CREDENTIALS')
    origins = parse_origins(config.get('WALLET_ORIGINS')) or parse_origins(config.get('APP_URL'))

    missing = []
    if not issuer_id:
        missing.append('GOOGLE_WALLET_ISSUER_ID not set')
    if not service_account_email:
        missing.append('WALLET_SERVICE_ACCOUNT_EMAIL not set')
    if not credentials_path:
        missing.append('GOOGLE_APPLICATION_CREDENTIALS not set')
    if not origins:
        missing.append('WALLET_ORIGINS (or APP_URL) not set')

    if missing:
        raise ConfigurationError(f"Google Wallet configuration errors: {'; '.join(missing)}")

    info = load_service_account_key(credentials_path)
    private_key = load_private_key(info.get('private_key'))

    try:
        api_timeout = float(config.get('WALLET_API_TIMEOUT') or DEFAULT_API_TIMEOUT)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f'WALLET_API_TIMEOUT must be a number: {e}') from e
    if api_timeout <= 0:
        raise ConfigurationError('WALLET_API_TIMEOUT must be positive')

    defaults = PassContent()
    content = PassContent(
        issuer_name=config.get('WALLET_ISSUER_NAME') or defaults.issuer_name,
        header=config.get('WALLET_PASS_HEADER') or defaults.header,
        subheader=config.get('WALLET_PASS_SUBHEADER') or defaults.subheader,
        logo_uri=config.get('WALLET_LOGO_URI') or defaults.logo_uri,
        hero_image_uri=config.get('WALLET_HERO_IMAGE_URI', defaults.hero_image_uri) or None,
        background_color=config.get('WALLET_BACKGROUND_COLOR') or defaults.background_color,
        link_uri=config.get('WALLET_LINK_URI', defaults.link_uri) or None,
    )

    settings = IssuerSettings(
        issuer_id=issuer_id,
        class_suffix=class_suffix,
        service_account_email=service_account_email,
        credentials_path=credentials_path,
        origins=origins,
        private_key=private_key,
        service_account_info=info,
        api_timeout=api_timeout,
        content=content,
    )
    logger.info(f"Loaded Google Wallet issuer settings for class {settings.class_id}")
    return settings
