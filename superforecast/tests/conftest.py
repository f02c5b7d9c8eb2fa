from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from superforecast.app import create_app
from superforecast.config import AppSettings, get_settings
from superforecast.logger import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    configure_logging("WARNING")


@pytest.fixture()
def fresh_settings():
    """Drop cached settings so environment changes take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture()
def app():
    return create_app(AppSettings(log_level="WARNING"))


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client
