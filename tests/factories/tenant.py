"""Factories for tenants and users."""

from uuid import uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory

from app.modules.tenants.models import Tenant
from app.modules.users.models import User


class TenantFactory(SQLAlchemyFactory[Tenant]):
    __model__ = Tenant

    @classmethod
    def name(cls) -> str:
        return cls.__faker__.company()

    @classmethod
    def slug(cls) -> str:
        return f"{cls.__faker__.slug()}-{uuid4().hex[:6]}"

    @classmethod
    def rut(cls) -> str:
        return "76.123.456-0"

    @classmethod
    def is_active(cls) -> bool:
        return True

    @classmethod
    def settings(cls) -> dict:
        return {}


class UserFactory(SQLAlchemyFactory[User]):
    __model__ = User

    @classmethod
    def email(cls) -> str:
        return f"user-{uuid4().hex[:8]}@example.com"

    @classmethod
    def full_name(cls) -> str:
        return f"Test User {uuid4().hex[:4]}"

    @classmethod
    def password_hash(cls) -> str:
        # bcrypt hash of "testpassword123"
        return "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.xzQvGxRGlKHOHO"

    @classmethod
    def is_active(cls) -> bool:
        return True

    @classmethod
    def is_superuser(cls) -> bool:
        return False
