import logging
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.core.exceptions import DependencyError

logger = logging.getLogger(__name__)


def db_exception(func):
    """Translate SQLAlchemy failures raised by a repository call into DependencyError."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError as e:
            logger.error(f"{func.__qualname__}: integrity error: {e.orig}")
            raise DependencyError("Conflicting or dangling reference", 409) from e
        except SQLAlchemyError as e:
            logger.error(f"{func.__qualname__}: {type(e).__name__}", exc_info=True)
            raise DependencyError("Database error occurred", 500) from e

    return wrapper
