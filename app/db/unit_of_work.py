"""
Unit of work - one commit-or-rollback scope per lifecycle operation.
"""
import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, DomainError

logger = logging.getLogger(__name__)


@contextmanager
def atomic(db: Session, label: str = "operation") -> Iterator[Session]:
    """
    Run the enclosed block as a single transaction on *db*.

    Commits on normal exit. On any exception the session is rolled back and
    the exception re-raised, so no partial state survives. A unique-index
    violation surfacing at flush/commit time is reported as ConflictError
    carrying the database message. Domain errors are logged without a traceback.
    """
    try:
        yield db
        db.commit()
        logger.debug(f"[DB] {label} committed")
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"[DB] {label} rolled back on integrity error: {exc.orig}")
        raise ConflictError(f"{label} conflicts with existing data: {exc.orig}") from exc
    except DomainError as exc:
        db.rollback()
        logger.warning(f"[DB] {label} rolled back: {exc}")
        raise
    except Exception:
        db.rollback()
        logger.warning(f"[DB] {label} rolled back", exc_info=True)
        raise
