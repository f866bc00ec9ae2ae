"""Shared test fixtures."""
import pytest
from redenomination.config import Settings
from redenomination.conversion.engine import RedenominationEngine
from redenomination.models.rule import Rule
from redenomination.registry.countries import RuleRegistry


@pytest.fixture
def settings():
    """Settings with built-in defaults regardless of the environment."""
    return Settings(default_locale="en-US", default_decimals=2, default_rounding="round")


@pytest.fixture
def idr_rule():
    return Rule(name="test", factor=1000, new_currency="IDR", decimals=2)


@pytest.fixture
def idr_engine(idr_rule, settings):
    return RedenominationEngine(idr_rule, settings=settings)


@pytest.fixture
def registry():
    """A fresh registry seeded with the built-in entries."""
    return RuleRegistry()
