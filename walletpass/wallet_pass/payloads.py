# walletpass/wallet_pass/payloads.py

"""
Google Wallet Generic Pass Payloads

Builders for the genericObject (one per attendee) and genericClass (one per
deployment) JSON bodies accepted by the Wallet Objects API.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

LANGUAGE = 'en-US'

_UNSAFE_ID_CHARS = re.compile(r'[^a-zA-Z0-9_.-]')


def sanitize_identifier(value: str) -> str:
    """Replace every character not allowed in a Wallet resource id with '_'."""
    return _UNSAFE_ID_CHARS.sub('_', str(value))


def build_object_id(issuer_id: str, subject: str, timestamp_ms: int) -> str:
    """
    Build the id for one issuance attempt: <issuer>.<subject>-<epoch millis>.

    The timestamp makes every attempt distinct; retrying the same attempt
    reuses the id it was given.
    """
    return f"{issuer_id}.{sanitize_identifier(subject)}-{timestamp_ms}"


def localized(value: str) -> Dict[str, Any]:
    return {'defaultValue': {'language': LANGUAGE, 'value': value}}


def _image(uri: str, description: str) -> Dict[str, Any]:
    return {
        'sourceUri': {'uri': uri},
        'contentDescription': localized(description),
    }


@dataclass(frozen=True)
class TextModule:
    id: str
    header: str
    body: str

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'header': self.header, 'body': self.body}


@dataclass(frozen=True)
class LinkModule:
    id: str
    uri: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {'uri': self.uri, 'description': self.description, 'id': self.id}


@dataclass(frozen=True)
class PassObjectRequest:
    """Content of one attendee's pass, ready to be sent to the API."""
    object_id: str
    class_id: str
    card_title: str
    header: str
    subheader: str
    text_modules: Tuple[TextModule, ...]
    logo_uri: str
    logo_description: str
    background_color: str
    hero_image_uri: Optional[str] = None
    hero_image_description: Optional[str] = None
    links: Tuple[LinkModule, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            'id': self.object_id,
            'classId': self.class_id,
            'cardTitle': localized(self.card_title),
            'subheader': localized(self.subheader),
            'header': localized(self.header),
            'textModulesData': [module.to_dict() for module in self.text_modules],
            'logo': _image(self.logo_uri, self.logo_description),
            'hexBackgroundColor': self.background_color,
        }
        if self.hero_image_uri:
            payload['heroImage'] = _image(self.hero_image_uri, self.hero_image_description or '')
        if self.links:
            payload['linksModuleData'] = {'uris': [link.to_dict() for link in self.links]}
        return payload


def build_pass_object(profile, object_id: str, settings) -> PassObjectRequest:
    """Build the pass object request for a profile under the deployment's class."""
    content = settings.content
    links = ()
    if content.link_uri:
        links = (
            LinkModule(
                id=f"{sanitize_identifier(content.issuer_name.lower())}_website",
                uri=content.link_uri,
                description=f"Visit {content.issuer_name}",
            ),
        )

    return PassObjectRequest(
        object_id=object_id,
        class_id=settings.class_id,
        card_title=profile.display_name,
        header=content.header,
        subheader=content.subheader,
        text_modules=(
            TextModule(id='user_email', header='Email', body=profile.email),
            TextModule(id='user_role', header='Role', body=profile.role),
        ),
        logo_uri=content.logo_uri,
        logo_description=f"{content.issuer_name} Logo",
        background_color=content.background_color,
        hero_image_uri=content.hero_image_uri,
        hero_image_description=f"{content.issuer_name} Event Banner",
        links=links,
    )


def build_pass_class(settings, review_status: str = 'DRAFT') -> Dict[str, Any]:
    """
    Build the genericClass definition for the deployment.

    Placeholder values are overridden by each object; the card row template
    shows the object's cardTitle (the attendee's name).
    """
    content = settings.content
    return {
        'id': settings.class_id,
        'classTemplateInfo': {
            'cardTemplateOverride': {
                'cardRowTemplateInfos': [
                    {
                        'threeItems': {
                            'startItem': {
                                'firstValue': {
                                    'fields': [
                                        {'fieldPath': 'object.cardTitle.defaultValue.value'},
                                    ],
                                },
                            },
                        },
                    },
                ],
            },
        },
        'cardTitle': localized('User Full Name Placeholder'),
        'header': localized(content.header),
        'subheader': localized(content.subheader),
        'logo': _image(content.logo_uri, f"{content.issuer_name} Logo"),
        'issuerName': content.issuer_name,
        'reviewStatus': review_status,
        'hexBackgroundColor': content.background_color,
        'textModulesData': [
            {
                'id': 'user_email',
                'header': 'Email',
                'body': 'user.email@example.com',
                'defaultValue': {'language': LANGUAGE, 'value': 'N/A'},
            },
            {
                'id': 'user_role',
                'header': 'Role',
                'body': 'Attendee Role',
                'defaultValue': {'language': LANGUAGE, 'value': 'N/A'},
            },
        ],
    }
