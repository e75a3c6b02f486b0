"""
Service-level errors. Each carries the HTTP status it maps to at the API boundary;
main.py renders them into the standard error envelope.
"""
import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing input."""
    status_code = 400


class AuthError(ServiceError):
    """Bad OTP or bad/expired session credential."""
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class PreconditionError(ServiceError):
    """A business rule gate is unmet (e.g. registration incomplete)."""
    status_code = 400


class InternalError(ServiceError):
    status_code = 500


class StorageError(InternalError):
    pass


@contextmanager
def database_errors(operation: str, message: str = "Database error", **context):
    """Log a storage failure with enough context for an operator, then surface it as a 500."""
    try:
        yield
    except SQLAlchemyError as exc:
        logger.exception("%s failed %s", operation, context)
        raise InternalError(message) from exc
