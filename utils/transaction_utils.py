"""
Transaction Utilities for GigMarket Backend
==========================================

Helpers for write paths that rely on the database to serialize conflicting
writes (unique constraints, row locks, single-statement updates).

Usage Examples:
    @retry_on_deadlock()
    def record_review(...):
        with transaction.atomic():
            ...
"""

import logging
import time
from functools import wraps

from django.db import DEFAULT_DB_ALIAS, OperationalError, connections


logger = logging.getLogger(__name__)

# Driver messages for transient lock conflicts (PostgreSQL, MySQL, SQLite)
TRANSIENT_LOCK_MARKERS = (
    "deadlock detected",
    "deadlock found",
    "could not serialize access",
    "database is locked",
    "database table is locked",
)


def is_transient_lock_error(exc: Exception) -> bool:
    message = str(exc).lower()
    return isinstance(exc, OperationalError) and any(marker in message for marker in TRANSIENT_LOCK_MARKERS)


def retry_on_deadlock(max_retries=5, delay=0.05, backoff=2.0, using=None):
    """
    Decorator to retry a transactional operation on lock contention with exponential backoff.

    Only the outermost transaction can be retried: when the call happens inside
    an enclosing ``atomic`` block the error is re-raised for that block to handle.

    Args:
        max_retries (int): Maximum number of retry attempts
        delay (float): Initial delay between retries in seconds
        backoff (float): Backoff multiplier for delay
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            current_delay = delay
            conn = connections[using or DEFAULT_DB_ALIAS]

            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except OperationalError as e:
                    if not is_transient_lock_error(e) or conn.in_atomic_block or attempt == max_retries:
                        raise
                    logger.warning(
                        f"Lock contention in {func.__name__}, retrying in {current_delay}s "
                        f"(attempt {attempt + 1}/{max_retries})"
                    )
                    time.sleep(current_delay)
                    current_delay *= backoff

        return wrapper

    return decorator
