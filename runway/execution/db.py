# ============================================
# execution/db.py
# ============================================
import logging
from contextlib import contextmanager

from django.db import DatabaseError

from execution.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def persistence_guard(action: str):
    """
    Translate database failures into PersistenceError.

    Put it outside ``transaction.atomic()`` so the block is rolled back
    before the error is re-raised.
    """
    try:
        yield
    except DatabaseError as exc:
        logger.error("[db] %s failed: %s", action, exc)
        raise PersistenceError() from exc
