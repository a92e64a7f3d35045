from contextlib import contextmanager
import logging
from sqlalchemy.exc import SQLAlchemyError
from models import db
from app.exceptions import PersistenceFailure


@contextmanager
def transactional(message="DB transaction failed"):
    """Context manager to wrap a database transaction.

    Commits when the block finishes, rolls back on any exception. Store
    errors are re-raised as ``PersistenceFailure``; domain errors pass
    through unchanged.
    """
    try:
        yield
        db.session.commit()
    except SQLAlchemyError as e:
        logging.error(f"{message}: %s", e, exc_info=True)
        db.session.rollback()
        raise PersistenceFailure() from e
    except Exception:
        db.session.rollback()
        raise
