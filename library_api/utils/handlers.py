from flask import request
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from library_api.extensions import db
from library_api.repositories.user_repo import TokenBlocklistRepo
from library_api.utils.errors import LibraryError
from library_api.utils.responses import fail


def register_error_handlers(app):
    @app.errorhandler(LibraryError)
    def _library_error(e):
        db.session.rollback()
        app.logger.warning(f"[{request.method} {request.path}] {e.status_code}: {e.message}")
        return fail(e.message, e.status_code, getattr(e, "errors", None))

    @app.errorhandler(SQLAlchemyError)
    def _db_error(e):
        db.session.rollback()
        app.logger.exception(f"[{request.method} {request.path}] database error: {e}")
        return fail("Database error", 500)

    @app.errorhandler(HTTPException)
    def _http_error(e):
        return fail(e.description or e.name, e.code)


def register_jwt_handlers(jwt):
    @jwt.token_in_blocklist_loader
    def _is_revoked(_header, payload):
        return TokenBlocklistRepo.is_revoked(payload["jti"])

    @jwt.unauthorized_loader
    def _missing_token(reason):
        return fail(reason, 401)

    @jwt.invalid_token_loader
    def _invalid_token(reason):
        return fail(reason, 401)

    @jwt.expired_token_loader
    def _expired_token(_header, _payload):
        return fail("Token has expired", 401)

    @jwt.revoked_token_loader
    def _revoked_token(_header, _payload):
        return fail("Token has been revoked", 401)
