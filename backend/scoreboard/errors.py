from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError


class ApiError(Exception):
    """Error that maps directly onto an HTTP response."""

    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'error': self.message}


class ValidationError(ApiError):
    status_code = 400
    message = 'Invalid request'


class Unauthorized(ApiError):
    status_code = 401
    message = 'Unauthorized: Invalid Google Token'


class Forbidden(ApiError):
    status_code = 403
    message = 'Forbidden: origin not allowed'


class ServerError(ApiError):
    status_code = 500


class ConfigurationError(ServerError):
    """Server-side misconfiguration. Clients only see the generic message."""

    def __init__(self, detail):
        super().__init__()
        self.detail = detail

    def __str__(self):
        return self.detail


def register_error_handlers(flask_app, db):
    @flask_app.errorhandler(ApiError)
    def handle_api_error(exc):
        if exc.status_code >= 500:
            flask_app.logger.error(f"[server-error] {exc.__class__.__name__}: {exc}")
        return jsonify(exc.to_dict()), exc.status_code

    @flask_app.errorhandler(SQLAlchemyError)
    def handle_db_error(exc):
        db.session.rollback()
        flask_app.logger.error(f"[db-error] {exc.__class__.__name__}: {exc}")
        return jsonify(ServerError().to_dict()), 500
