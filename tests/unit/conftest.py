"""
Shared fixtures for semdag unit tests.

Each fixture builds fresh Type objects, so tests never share references
by accident.
"""

import pytest
from pydantic import BaseModel

from semdag import Type, approximately
from semdag.config import get_settings
from semdag.registry import reset_registry


class User(BaseModel):
    id: int
    name: str


@pytest.fixture(autouse=True)
def fresh_state():
    """Reload settings and drop the global registry around every test."""
    get_settings.cache_clear()
    reset_registry()
    yield
    get_settings.cache_clear()
    reset_registry()


@pytest.fixture
def string_type():
    return Type.of(str, name="String")


@pytest.fixture
def number_type():
    return Type.of(float, name="Number", equals=approximately(abs_tol=1e-9))


@pytest.fixture
def boolean_type():
    return Type.of(bool, name="Boolean")


@pytest.fixture
def user_type():
    return Type.of(User)
