"""Shared test fixtures."""
import pytest
import structlog

from currency_input.config import Settings
from tests.factories import make_config


@pytest.fixture
def settings():
    return Settings(default_locale="en-US", maximum_fraction_digits=10, default_decimals_limit=2)


@pytest.fixture
def default_config():
    return make_config()


@pytest.fixture
def de_config():
    return make_config(locale="de-DE")


@pytest.fixture
def de_eur_config():
    return make_config(locale="de-DE", currency="EUR")


@pytest.fixture
def usd_config():
    return make_config(locale="en-US", currency="USD")


@pytest.fixture
def prefix_config():
    return make_config(prefix="$")


@pytest.fixture
def suffix_config():
    return make_config(suffix=" USD")


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()
