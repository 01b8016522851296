from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config, DEFAULT_CORS_ORIGINS

db = SQLAlchemy()
migrate = Migrate()


def create_app(config_class=Config, store=None):
    """Build the app.

    ``store`` replaces the database-backed UserStateStore, e.g. with a
    test double; by default the store wraps the shared ``db`` pool.
    """
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(
        flask_app,
        supports_credentials=True,
        origins=flask_app.config.get('CORS_ORIGINS', DEFAULT_CORS_ORIGINS),
        allow_headers=['Content-Type', 'Authorization'],
    )

    from app.errors import register_error_handlers
    register_error_handlers(flask_app)

    # Ensure the model is registered on db.metadata
    from app.models import UserState  # noqa: F401
    from app.services.wallets import UserStateStore
    from app.errors import PersistenceError

    if store is None:
        store = UserStateStore(db)
    flask_app.extensions['user_state_store'] = store

    # Import and register blueprints here
    from app.main import main
    flask_app.register_blueprint(main)

    from app.api.users import users
    flask_app.register_blueprint(users, url_prefix='/api/user')

    if flask_app.config.get('AUTO_CREATE_TABLES', True) and hasattr(store, 'ensure_schema'):
        with flask_app.app_context():
            try:
                store.ensure_schema()
            except PersistenceError:
                # Already logged; requests will report the outage themselves
                flask_app.logger.warning("[startup] user_state table not verified, continuing")

    @click.command('init-db')
    def init_db_command():
        """Creates the user_state table if it does not exist."""
        with flask_app.app_context():
            flask_app.extensions['user_state_store'].ensure_schema()
        click.echo('user_state table is ready.')

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the user_state table (local development only)."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
        click.echo('Database has been reset!')

    flask_app.cli.add_command(init_db_command)
    flask_app.cli.add_command(db_reset_command)

    return flask_app
