import os
import sys
import pytest

# Ensure the backend root (containing the `scoreboard` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from scoreboard import create_app, db
from scoreboard.errors import Unauthorized
from scoreboard.services.identity import IdentityClaims


class TestConfig:
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    GOOGLE_CLIENT_ID = 'test-client-id.apps.googleusercontent.com'
    ORIGIN_POLICY = 'open'
    ALLOWED_ORIGINS = []
    ALLOWED_ORIGIN_SUFFIX = ''
    ALLOWED_DOMAIN = ''
    DB_CONNECT_TIMEOUT_SEC = 1
    LEADERBOARD_SIZE = 10
    AUTO_CREATE_TABLES = True
    LOG_LEVEL = 'DEBUG'


class FakeVerifier:
    """Maps known tokens to claims and records every call."""

    def __init__(self):
        self.tokens = {}
        self.calls = []

    def add(self, token, subject, name=None, picture=None):
        self.tokens[token] = IdentityClaims(subject=subject, name=name, picture=picture)

    def verify(self, token):
        self.calls.append(token)
        claims = self.tokens.get(token)
        if claims is None:
            raise Unauthorized() from ValueError('Token expired')
        return claims


@pytest.fixture()
def make_app():
    """Build an app from TestConfig with some settings overridden."""
    def _make(**overrides):
        config_class = type('OverrideConfig', (TestConfig,), overrides)
        return create_app(config_class)
    return _make


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def fake_verifier():
    return FakeVerifier()


@pytest.fixture()
def verifier(flask_app, fake_verifier):
    fake = fake_verifier
    fake.add('token-u1', 'u1', name='Ada', picture='https://img.example/ada.png')
    fake.add('token-u2', 'u2', name='Bob', picture='https://img.example/bob.png')
    flask_app.extensions['identity_verifier'] = fake
    return fake
