from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator
from typing import TypeVar

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.services.outcomes import Failure, FailureKind, Outcome

logger = logging.getLogger(__name__)

T = TypeVar("T")

engine = create_engine(settings.database_url, pool_pre_ping=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _apply_lock_timeout(db: Session) -> None:
    if db.get_bind().dialect.name == "postgresql":
        # SET does not take bind parameters; the value is an int from settings.
        db.execute(text(f"SET LOCAL lock_timeout = {int(settings.lock_timeout_ms)}"))


def run_in_transaction(
    db: Session,
    work: Callable[[Session], Outcome[T]],
    *,
    cancel: threading.Event | None = None,
    operation: str = "unit_of_work",
) -> Outcome[T]:
    """
    Run ``work`` as one all-or-nothing unit of work on a caller-owned session.

    ``work`` returns an Outcome. A failed Outcome rolls the transaction back and
    is returned as-is; a successful one is committed unless ``cancel`` was set in
    the meantime. Storage errors are rolled back and reported as
    ``storage_failure`` instead of escaping; anything else is rolled back and
    re-raised.
    """
    try:
        _apply_lock_timeout(db)
        outcome = work(db)
        if outcome.failure is not None:
            db.rollback()
            return outcome
        if cancel is not None and cancel.is_set():
            db.rollback()
            logger.info(
                f"{operation} cancelled before commit",
                extra={"error_code": FailureKind.cancelled.value},
            )
            return Outcome.fail(Failure(FailureKind.cancelled, f"{operation} was cancelled"))
        db.commit()
        return outcome
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning(
            f"{operation} failed in storage: {exc.__class__.__name__}",
            extra={"error_code": FailureKind.storage_failure.value},
        )
        return Outcome.fail(Failure(FailureKind.storage_failure, f"{operation} could not be completed; retry"))
    except Exception:
        db.rollback()
        raise
