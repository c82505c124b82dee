import threading

from flask import current_app
from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from scoreboard import db
from scoreboard.errors import ServerError


def build_engine_options(uri, timeout) -> dict:
    """Engine options that make an unreachable database fail within ``timeout`` seconds."""
    options = {'pool_pre_ping': True}
    try:
        backend = make_url(uri).get_backend_name()
    except ArgumentError:
        return options
    if backend == 'postgresql':
        options['connect_args'] = {'connect_timeout': int(timeout)}
    elif backend == 'sqlite':
        options['connect_args'] = {'timeout': float(timeout)}
    return options


class DatabaseHandle:
    """Process-wide, lazily initialized database readiness guard.

    The first request to touch the database probes it (and optionally creates
    tables); concurrent first requests wait on the lock instead of repeating
    the work. A failed probe leaves the handle uninitialized.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ready = False

    @property
    def ready(self) -> bool:
        return self._ready

    def _probe(self, app) -> None:
        with db.engine.connect() as conn:
            conn.execute(text('SELECT 1'))
        if app.config.get('AUTO_CREATE_TABLES'):
            db.create_all()

    def ensure(self, app) -> None:
        if self._ready:
            return
        with self._lock:
            if self._ready:
                return
            try:
                self._probe(app)
            except SQLAlchemyError as exc:
                app.logger.error(f"[db-connect] failed: {exc.__class__.__name__}: {exc}")
                raise ServerError('Database unavailable') from exc
            self._ready = True
            app.logger.info("[db-connect] database ready")

    def reset(self) -> None:
        with self._lock:
            self._ready = False


def get_database_handle() -> DatabaseHandle:
    return current_app.extensions['database_handle']


def ensure_connected() -> None:
    get_database_handle().ensure(current_app._get_current_object())
