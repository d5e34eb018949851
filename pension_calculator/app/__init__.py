"""Application factory and app-wide configuration."""

import os
from typing import Optional

from flask import Flask
from flask_cors import CORS
from loguru import logger

from pension_calculator.app.api.routes import api_bp
from pension_calculator.config import CONFIG_KEY, AppConfig, load_app_config
from pension_calculator.log import configure_logging

CONFIG_ENV_VAR = "PENSION_CALCULATOR_CONFIG"


def create_app(config: Optional[AppConfig] = None) -> Flask:
    """Build the Flask app instance.

    Without an explicit config the JSON file named by ``PENSION_CALCULATOR_CONFIG``
    is loaded, falling back to the defaults.
    """
    if config is None:
        config = load_app_config(os.environ.get(CONFIG_ENV_VAR))

    configure_logging(config.log_level, config.log_file)

    app = Flask(__name__)
    app.config[CONFIG_KEY] = config
    app.json.ensure_ascii = False

    CORS(
        app,
        resources={r"/api/*": {"origins": config.cors_origins}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    logger.info(f"Pension calculator API ready (default language '{config.default_language}')")
    return app
