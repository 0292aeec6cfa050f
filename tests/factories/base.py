"""Base factory configuration for polyfactory."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from polyfactory.factories.sqlalchemy_factory import SQLAlchemyFactory


def utc_now() -> datetime:
    """Generate current UTC time (naive for PostgreSQL compatibility)."""
    return datetime.now(UTC).replace(tzinfo=None)


def generate_uuid() -> UUID:
    return uuid4()


class BaseFactory(SQLAlchemyFactory):
    """Base factory with common configuration for all models.

    Relationships are never generated; tests attach children explicitly so
    every tree is exactly what the test describes.
    """

    __is_base_factory__ = True
    __set_relationships__ = False
    __set_foreign_keys__ = True  # We set FK values explicitly
