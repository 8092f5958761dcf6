"""Local Library: a server-rendered catalog of books, authors, genres and copies.

Run:
    pip install -e .
    flask --app local_library init-db
    flask --app local_library seed
    flask --app local_library run

Open http://127.0.0.1:5000/catalog/
"""

from flask import Flask, redirect, render_template, request, url_for
from flask_talisman import Talisman
from flask_wtf import CSRFProtect
from jinja2 import TemplateError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import InternalServerError, NotFound

from .cli import register_commands
from .config import Config
from .logs import bind_request_id, clear_request_id, configure_logging, current_request_id, get_logger
from .routes import create_catalog_blueprint
from .store import CatalogStore

__version__ = "0.1.0"

logger = get_logger("app")
csrf = CSRFProtect()


def _engine_options(app):
    # busy timeout for SQLite so a locked database fails instead of hanging
    if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
        options = app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", {})
        options.setdefault("connect_args", {}).setdefault("timeout", app.config["LIBRARY_DB_TIMEOUT"])


def create_app(config=None):
    """Build the application; ``config`` is a config class/object or a mapping."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if isinstance(config, dict):
        app.config.update(config)
    elif config is not None:
        app.config.from_object(config)

    configure_logging(app.config["LIBRARY_LOG_LEVEL"])
    _engine_options(app)

    csrf.init_app(app)
    if app.config["TALISMAN_ENABLED"]:
        Talisman(
            app,
            force_https=app.config["LIBRARY_FORCE_HTTPS"],
            content_security_policy=app.config["CONTENT_SECURITY_POLICY"],
        )

    store = CatalogStore()
    store.init_app(app)

    app.register_blueprint(create_catalog_blueprint(store))
    register_error_handlers(app, store)
    register_commands(app, store)

    @app.before_request
    def _bind_request_id():
        bind_request_id(request.headers.get("X-Request-ID"))

    @app.after_request
    def _echo_request_id(response):
        response.headers["X-Request-ID"] = current_request_id()
        return response

    @app.teardown_request
    def _clear_request_id(exc):
        clear_request_id()

    @app.route("/")
    def home():
        return redirect(url_for("catalog.index"))

    logger.debug("Application created with database %s", app.config["SQLALCHEMY_DATABASE_URI"])
    return app


def _error_page(title, message, status):
    try:
        return render_template("error.html", title=title, message=message, status=status), status
    except TemplateError:
        logger.exception("Failed to render the error page")
        return f"{status} {title}", status, {"Content-Type": "text/plain; charset=utf-8"}


def register_error_handlers(app, store):
    @app.errorhandler(NotFound)
    def not_found(error):
        return _error_page("Not Found", error.description, 404)

    @app.errorhandler(SQLAlchemyError)
    def store_failure(error):
        store.session.rollback()
        logger.exception("Store failure while handling %s %s", request.method, request.path)
        return _error_page("Server Error", "Something went wrong while talking to the database.", 500)

    @app.errorhandler(InternalServerError)
    def server_error(error):
        original = getattr(error, "original_exception", None)
        if original is not None:
            logger.error("Unhandled error while handling %s %s", request.method, request.path, exc_info=original)
        return _error_page("Server Error", "Something went wrong while building this page.", 500)
