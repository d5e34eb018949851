from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from pension_calculator.app import create_app
from pension_calculator.config import AppConfig


@pytest.fixture()
def app_config() -> AppConfig:
    return AppConfig()


@pytest.fixture()
def client(app_config: AppConfig) -> FlaskClient:
    flask_app = create_app(app_config)
    flask_app.config["TESTING"] = True
    with flask_app.test_client() as test_client:
        yield test_client
