"""Shared repository plumbing"""

import functools
import logging

import sentry_sdk
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quizrank.core.config import settings
from quizrank.core.exceptions import DatabaseException

logger = logging.getLogger(__name__)


class SessionRepository:
    """Base for repositories bound to one request-scoped session"""

    def __init__(self, db: Session):
        self.db = db


def store_call(func):
    """
    Translate SQLAlchemy failures into DatabaseException

    The session is rolled back so it stays usable by the caller.
    """

    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                f"Store call {type(self).__name__}.{func.__name__} failed: {e}",
                extra={"operation": func.__name__},
            )
            if settings.SENTRY_DSN:
                sentry_sdk.capture_exception(e)
            raise DatabaseException(details={"operation": func.__name__}) from e

    return wrapper
