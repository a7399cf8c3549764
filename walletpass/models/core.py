# walletpass/models/core.py

"""
Core Models Module

The users table is owned by the authentication service; this application
only reads it to personalise passes.
"""

from walletpass.core import db


class User(db.Model):
    """Model representing a registered user."""
    __tablename__ = 'users'

    # Opaque subject id issued by the authentication service
    id = db.Column(db.String(255), primary_key=True)
    name = db.Column(db.String(255), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    email_verified = db.Column('emailVerified', db.DateTime, nullable=True)
    image = db.Column(db.String(255), nullable=True)
    # Attendee, organizer, mentor, ...
    type = db.Column(db.String(50), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'type': self.type,
        }

    def __repr__(self):
        return f'<User {self.id}>'
