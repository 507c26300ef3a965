import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class MockShareError(Exception):
    """Base class for outcomes surfaced to API callers."""

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class NotFound(MockShareError):
    status_code = 404


class PasswordRequired(MockShareError):
    status_code = 401

    def __init__(self, message: str = "This mockup is password protected"):
        super().__init__(message)


class InvalidPassword(MockShareError):
    status_code = 401

    def __init__(self, message: str = "Invalid password"):
        super().__init__(message)


class Forbidden(MockShareError):
    status_code = 403

    def __init__(self, message: str = "You are not allowed to change this comment"):
        super().__init__(message)


class InvariantViolation(MockShareError):
    status_code = 409


class CannotDeleteCurrentVersion(InvariantViolation):
    def __init__(self, version_number: int, current_version: int):
        super().__init__(
            f"Cannot delete version {version_number}: "
            f"only archived versions below the current version {current_version} can be deleted"
        )
        self.version_number = version_number
        self.current_version = current_version


class StorageFailure(MockShareError):
    """Transient persistence error. The only outcome worth retrying."""

    status_code = 503


class VersionConflict(StorageFailure):
    status_code = 409


def register_error_handlers(app: FastAPI):
    @app.exception_handler(MockShareError)
    async def handle_mockshare_error(request: Request, error: MockShareError):
        body = {
            "error": type(error).__name__,
            "detail": error.message,
        }
        if isinstance(error, PasswordRequired):
            body["password_protected"] = True
        return JSONResponse(status_code=error.status_code, content=body)

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, error: SQLAlchemyError):
        # Reads run outside transactional(), so their failures arrive here untranslated
        logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=error)
        failure = StorageFailure("The data could not be loaded, please retry")
        return JSONResponse(
            status_code=failure.status_code,
            content={"error": type(failure).__name__, "detail": failure.message},
        )
