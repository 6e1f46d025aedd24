import importlib
import logging
import os
from datetime import datetime

from dotenv import load_dotenv
from flask import Flask
from flask_wtf.csrf import CSRFProtect

load_dotenv()

from core.configuration.configuration import CONFIGS, flask_env  # noqa: E402
from core.pocketbase import client_factory  # noqa: E402

csrf = CSRFProtect()

MODULES = ("submission", "review")

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(app):
    level = app.config.get("LOG_LEVEL", "INFO")
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)
    # requests/urllib3 are noisy at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def register_modules(app):
    for name in MODULES:
        module = importlib.import_module(f"app.modules.{name}")
        importlib.import_module(f"app.modules.{name}.routes")
        app.register_blueprint(getattr(module, f"{name}_bp"))


def create_app(config_name=None, pocketbase_factory=None, **overrides):
    """Application factory.

    ``pocketbase_factory`` is a zero-argument callable returning a client;
    every component asks it for its own instance. Tests pass one returning a
    :class:`core.pocketbase.fakes.FakePocketBase`.
    """
    app = Flask(__name__)

    config_name = config_name or flask_env()
    app.config.from_object(CONFIGS.get(config_name, CONFIGS["development"]))
    if "POCKETBASE_URL" in os.environ and config_name != "testing":
        app.config["POCKETBASE_URL"] = os.environ["POCKETBASE_URL"]
    app.config.update(overrides)

    configure_logging(app)
    csrf.init_app(app)

    app.extensions["pocketbase"] = pocketbase_factory or client_factory(app)

    register_modules(app)

    @app.context_processor
    def inject_year():
        return {"current_year": datetime.now().year}

    app.logger.info("Portal started (%s) against %s", config_name, app.config["POCKETBASE_URL"])
    return app
