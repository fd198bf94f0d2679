"""
Core — Transaction Helpers

`atomic` runs a service call in a single database transaction. Any
exception rolls the transaction back; low-level database errors are
logged and surfaced as StorageFailureError so callers never see a
partial success.

@file core/db.py
"""

import functools
import logging

from django.db import DatabaseError, transaction

from core.exceptions import StorageFailureError

logger = logging.getLogger('sims')


def atomic(func):
    """Decorator: all-or-nothing execution of a service operation."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            with transaction.atomic():
                return func(*args, **kwargs)
        except DatabaseError as exc:
            logger.exception('Storage failure in %s: %s', func.__qualname__, exc)
            raise StorageFailureError() from exc

    return wrapper
