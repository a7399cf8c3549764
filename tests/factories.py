"""
Test factories for creating consistent test data.
"""
import factory
from factory.alchemy import SQLAlchemyModelFactory

from walletpass.core import db
from walletpass.models import User


class BaseFactory(SQLAlchemyModelFactory):
    class Meta:
        abstract = True
        sqlalchemy_session = db.session
        sqlalchemy_session_persistence = 'commit'


class UserFactory(BaseFactory):
    class Meta:
        model = User

    id = factory.Sequence(lambda n: f'user-{n}')
    name = factory.Faker('name')
    email = factory.Faker('email')
    type = 'attendee'
