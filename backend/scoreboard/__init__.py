from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    from scoreboard.errors import ConfigurationError, register_error_handlers
    from scoreboard.services.connection import DatabaseHandle, build_engine_options
    from scoreboard.services.identity import GoogleTokenVerifier
    from scoreboard.services.origin import POLICIES, cors_origins

    uri = flask_app.config.get('SQLALCHEMY_DATABASE_URI')
    if not uri:
        flask_app.logger.error("[config] DATABASE_URL is missing")
        raise ConfigurationError('DATABASE_URL is missing')
    policy = flask_app.config.get('ORIGIN_POLICY', 'allowlist')
    if policy not in POLICIES:
        flask_app.logger.error(f"[config] unknown ORIGIN_POLICY {policy!r}")
        raise ConfigurationError(f"Unknown ORIGIN_POLICY {policy!r}")
    flask_app.config['ORIGIN_POLICY'] = policy

    # Short connect timeout so a dead database fails the request fast
    engine_options = build_engine_options(uri, flask_app.config.get('DB_CONNECT_TIMEOUT_SEC', 5))
    engine_options.update(flask_app.config.get('SQLALCHEMY_ENGINE_OPTIONS') or {})
    flask_app.config['SQLALCHEMY_ENGINE_OPTIONS'] = engine_options

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=cors_origins(flask_app.config))
    register_error_handlers(flask_app, db)

    flask_app.extensions['identity_verifier'] = GoogleTokenVerifier(flask_app.config.get('GOOGLE_CLIENT_ID'))
    flask_app.extensions['database_handle'] = DatabaseHandle()
    if not flask_app.config.get('GOOGLE_CLIENT_ID'):
        flask_app.logger.warning("[config] GOOGLE_CLIENT_ID is missing; score sync will fail")

    from scoreboard.main import main
    flask_app.register_blueprint(main)

    from scoreboard.api.scores import scores
    flask_app.register_blueprint(scores, url_prefix='/api')

    # Ensure models are registered on the metadata
    from scoreboard import models  # noqa: F401

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the database tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            flask_app.extensions['database_handle'].reset()
            click.echo('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
