# app/core/exceptions.py


class ServiceException(Exception):
    """Base error raised by services and repositories.

    Carries the HTTP status the API layer should answer with.
    """

    status_code = 400
    error_type = "service_error"

    def __init__(self, message: str, status_code: int = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(ServiceException):
    """Missing or malformed input. Never retried."""

    status_code = 400
    error_type = "validation_error"


class InvalidActionError(ServiceException):
    """Lesson event action outside the accepted vocabulary."""

    status_code = 400
    error_type = "invalid_action"


class NotFoundError(ServiceException):
    status_code = 404
    error_type = "not_found"


class DependencyError(ServiceException):
    """The persistence layer failed."""

    status_code = 500
    error_type = "database_error"
