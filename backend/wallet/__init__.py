# backend/wallet/__init__.py
from flask import Flask, request

from .config import Config
from .extensions import db, migrate
from .services import EXTENSION_KEY, build_services



def create_app(config_overrides: dict | None = None, token_factory=None) -> Flask:
    """
    Application factory and composition root.

    config_overrides is applied on top of Config before extensions bind, so
    tests can point SQLALCHEMY_DATABASE_URI at an in-memory database.
    token_factory replaces the random session token generator.
    """
    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)

    # Import models so Alembic can discover metadata reliably
    from . import models  # noqa: F401

    # Components share the request-scoped SQLAlchemy session
    app.extensions[EXTENSION_KEY] = build_services(
        db.session,
        token_factory=token_factory,
        bcrypt_rounds=app.config["BCRYPT_ROUNDS"],
    )

    # Register blueprints
    from .routes.system import system_bp
    from .routes.auth import auth_bp
    from .routes.transactions import transactions_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(transactions_bp)

    @app.after_request
    def add_cors_headers(response):
        origin = request.headers.get("Origin")
        if origin in app.config["CORS_ALLOWED_ORIGINS"]:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Vary"] = "Origin"
            response.headers["Access-Control-Allow-Headers"] = "Authorization, Content-Type"
            response.headers["Access-Control-Allow-Methods"] = "GET,POST,OPTIONS"
        return response

    # Register CLI commands
    from .cli import register_commands
    register_commands(app)

    return app
