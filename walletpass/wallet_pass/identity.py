# walletpass/wallet_pass/identity.py

"""
Identity Resolver

Turns the caller's session into the Profile printed on the pass: the session
JWT is verified locally with Flask-JWT-Extended, then the user row is looked
up by the token subject.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from flask_jwt_extended import get_jwt, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from walletpass.core import db
from walletpass.models import User
from .errors import ProfileNotFound, Unauthenticated

logger = logging.getLogger(__name__)

DEFAULT_DISPLAY_NAME = 'Valued Attendee'
DEFAULT_ROLE = 'Attendee'


@dataclass(frozen=True)
class Profile:
    id: str
    display_name: str
    email: str
    role: str


def read_session_claims() -> Dict[str, Any]:
    """
    Verify the session token of the current request and return its claims.

    Raises:
        Unauthenticated: if the token is missing, malformed, expired or
            signed with another key.
    """
    try:
        verify_jwt_in_request()
    except (JWTExtendedException, PyJWTError) as e:
        raise Unauthenticated(detail=str(e)) from e
    return get_jwt()


def _capitalize(value: Optional[str]) -> str:
    if not value:
        return DEFAULT_ROLE
    return value[:1].upper() + value[1:].lower()


def build_profile(user, session_email: str) -> Profile:
    """Combine a user row with the session email, filling in display defaults."""
    session_email = session_email or ''
    display_name = user.name or session_email.split('@')[0] or DEFAULT_DISPLAY_NAME
    return Profile(
        id=str(user.id),
        display_name=display_name,
        email=user.email or session_email,
        role=_capitalize(user.type),
    )


class SqlAlchemyProfileStore:
    """Looks user rows up in the users table."""

    def get(self, subject: str):
        return db.session.get(User, subject)


class IdentityResolver:
    """Resolves the authenticated caller to a Profile."""

    def __init__(self, store=None, claims_loader: Callable[[], Dict[str, Any]] = read_session_claims):
        self.store = store or SqlAlchemyProfileStore()
        self.claims_loader = claims_loader

    def resolve(self) -> Profile:
        """
        Raises:
            Unauthenticated: no valid session, or no subject/email claim.
            ProfileNotFound: no user row for the session subject.
        """
        claims = self.claims_loader()
        subject = claims.get('sub')
        email = claims.get('email')
        if not subject or not email:
            raise Unauthenticated(detail='Session token is missing subject or email')

        user = self.store.get(str(subject))
        if user is None:
            logger.warning(f"No user record for session subject {subject}")
            raise ProfileNotFound()

        return build_profile(user, email)
