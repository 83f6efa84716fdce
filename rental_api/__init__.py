import atexit
import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from .config import Config, configure_logging
from .controllers.bookings import bp as bookings_bp
from .controllers.owner import bp as owner_bp
from .controllers.users import bp as users_bp
from .exceptions import RentalError
from .models.store import Store

logger = logging.getLogger(__name__)


def _register_error_handlers(app: Flask):
    @app.errorhandler(RentalError)
    def rental_error(err: RentalError):
        return jsonify(success=False, message=err.message), err.status_code

    @app.errorhandler(HTTPException)
    def http_error(err: HTTPException):
        return jsonify(success=False, message=err.description), err.code

    @app.errorhandler(Exception)
    def unexpected_error(err: Exception):
        logger.exception("Unhandled error")
        return jsonify(success=False, message="Internal server error"), 500


def create_app(overrides: dict | None = None):
    """
    Build the API. `overrides` wins over environment settings
    (tests pass DATA_PATH and TESTING here).
    """
    app = Flask(__name__)
    app.config.update(Config().as_dict())
    if overrides:
        app.config.update(overrides)

    configure_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    # One store per process, flushed once at shutdown
    store = Store(app.config["DATA_PATH"])
    app.extensions["store"] = store
    if not app.config.get("TESTING"):
        atexit.register(store.close)

    app.register_blueprint(users_bp)
    app.register_blueprint(owner_bp)
    app.register_blueprint(bookings_bp)
    _register_error_handlers(app)

    @app.get("/")
    def index():
        return "Server is running"

    return app
