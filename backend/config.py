import os

DEFAULT_ALLOWED_ORIGINS = ','.join([
    "http://localhost",
    "https://localhost",
    "capacitor://localhost",
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
])


def _split_csv(raw):
    return [item.strip() for item in (raw or '').split(',') if item.strip()]


class Config:
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Audience the Google ID token must be issued for
    GOOGLE_CLIENT_ID = os.environ.get('GOOGLE_CLIENT_ID')
    # Boundary filter: open, allowlist or domain
    ORIGIN_POLICY = os.environ.get('ORIGIN_POLICY', 'allowlist')
    ALLOWED_ORIGINS = _split_csv(os.environ.get('ALLOWED_ORIGINS', DEFAULT_ALLOWED_ORIGINS))
    ALLOWED_ORIGIN_SUFFIX = os.environ.get('ALLOWED_ORIGIN_SUFFIX', '')
    ALLOWED_DOMAIN = os.environ.get('ALLOWED_DOMAIN', '')
    # Fail fast when the database cannot be reached (seconds)
    DB_CONNECT_TIMEOUT_SEC = int(os.environ.get('DB_CONNECT_TIMEOUT_SEC', '5'))
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    # Schema is managed by Flask-Migrate; set to 1 only for throwaway databases
    AUTO_CREATE_TABLES = os.environ.get('AUTO_CREATE_TABLES', '0') == '1'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
