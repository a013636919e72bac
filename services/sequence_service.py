# services/sequence_service.py
"""
Sequence generator for human-readable document codes (INV001, PMT001, ...).

The counter row is bumped with a single UPDATE ... SET seq = seq + 1, so two
concurrent callers can never read the same number. When the row does not
exist yet it is inserted with seq = 1 inside a savepoint; if a concurrent
caller inserted it first, the primary key rejects the second insert and the
loser falls back to the increment, drawing seq = 2.
"""
import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models import Counter

logger = logging.getLogger(__name__)


def _increment(db: Session, kind: str) -> bool:
     """Bump an existing counter. False when no row exists for the kind."""
     result = db.execute(
          update(Counter)
          .where(Counter.kind == kind)
          .values(seq=Counter.seq + 1)
          .execution_options(synchronize_session=False)
     )
     return result.rowcount == 1


def _create(db: Session, kind: str, default_prefix: str, default_pad: int) -> bool:
     """Insert the counter at seq = 1. False when another caller created it first."""
     try:
          with db.begin_nested():
               db.add(Counter(kind=kind, seq=1, prefix=default_prefix, pad=default_pad))
     except IntegrityError:
          logger.info("Counter %s was created concurrently; incrementing instead", kind)
          return False
     logger.info("Created counter %s with prefix %s", kind, default_prefix)
     return True


def next_code(db: Session, kind: str, default_prefix: str, default_pad: int = 3) -> str:
     """
     Issue the next code for a document kind.

     Args:
          db: SQLAlchemy database session
          kind: Counter key, e.g. "invoice" or "payment"
          default_prefix: Prefix stored when the counter is first created
          default_pad: Zero-padding width stored when the counter is first created

     Returns:
          The rendered code, e.g. "INV007"
     """
     if not _increment(db, kind):
          if not _create(db, kind, default_prefix, default_pad):
               if not _increment(db, kind):
                    raise RuntimeError(f"Counter {kind} could not be created or incremented")

     counter = db.execute(
          select(Counter)
          .where(Counter.kind == kind)
          .execution_options(populate_existing=True)
     ).scalar_one()
     return counter.render(default_prefix, default_pad)
