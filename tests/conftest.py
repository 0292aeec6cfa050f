"""Root test fixtures shared across all test types."""

import os

os.environ.setdefault("APP_ENV", "testing")

# ruff: noqa: E402 - Imports must be after env var setup
from uuid import uuid4

import pytest

from src.buildtrack.core.config import get_settings
from src.buildtrack.models.enums import Role
from src.buildtrack.services.access import Caller

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def architect() -> Caller:
    return Caller(user_id=uuid4(), role=Role.ARCHITECT)


@pytest.fixture
def contractor() -> Caller:
    return Caller(user_id=uuid4(), role=Role.CONTRACTOR)


@pytest.fixture
def client_caller() -> Caller:
    return Caller(user_id=uuid4(), role=Role.CLIENT)
