import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def write_transaction(db: Session, action: str):
    """Commit everything staged in the block, or roll all of it back.

    Database errors are re-raised as StorageFailure. Domain errors raised
    inside the block also roll back and propagate unchanged.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Storage failure while {action}")
        raise StorageFailure(f"Storage failure while {action}") from e
    except Exception:
        db.rollback()
        raise
