"""Test data factories using polyfactory."""

from tests.factories.base import BaseFactory, generate_uuid, utc_now
from tests.factories.project import (
    PhotoFactory,
    ProjectFactory,
    TaskCommentFactory,
    TaskFactory,
    TradeFactory,
)

__all__ = [
    "BaseFactory",
    "PhotoFactory",
    "ProjectFactory",
    "TaskCommentFactory",
    "TaskFactory",
    "TradeFactory",
    "generate_uuid",
    "utc_now",
]
