import os
import sys
import pytest

# Ensure the backend root (containing the `app` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from eth_account import Account
from eth_account.messages import encode_defunct

from app import create_app, db
from app.services.wallets import build_update_message


OWNER_KEY = '0x' + '11' * 32
OTHER_KEY = '0x' + '22' * 32


class TestConfig:
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {}
    REQUIRE_SIGNATURE = False
    NORMALIZE_WALLET_CASE = False
    AUTO_CREATE_TABLES = True
    CORS_ORIGINS = ['http://localhost:3000']
    LOG_LEVEL = 'DEBUG'


def sign_update(wallet, private_key=OWNER_KEY):
    """Sign the update message for ``wallet`` and return 0x-prefixed hex."""
    signed = Account.sign_message(encode_defunct(text=build_update_message(wallet)), private_key=private_key)
    return '0x' + bytes(signed.signature).hex()


@pytest.fixture()
def owner():
    return Account.from_key(OWNER_KEY)


@pytest.fixture()
def other():
    return Account.from_key(OTHER_KEY)


@pytest.fixture()
def make_app():
    """Build an app with config overrides, e.g. make_app(REQUIRE_SIGNATURE=True)."""
    contexts = []

    def _make(store=None, **overrides):
        config_class = type('OverrideConfig', (TestConfig,), overrides)
        application = create_app(config_class, store=store)
        ctx = application.app_context()
        ctx.push()
        db.create_all()
        contexts.append(ctx)
        return application

    yield _make
    for ctx in reversed(contexts):
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import app.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()
