# core/db.py

"""
SERVICE BOUNDARY

Wraps a service call so callers only ever see core.exceptions errors:
- django DatabaseError          -> RemoteStoreError (never retried)
- django ValidationError        -> core ValidationError (model full_clean)

Usable as a decorator or a context manager. Place it OUTSIDE transaction.atomic
so the transaction has already rolled back when the error is translated:

    @service_call("post journal entry")
    @transaction.atomic
    def post_journal_entry(...):
        ...
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError

from core.exceptions import RemoteStoreError, ValidationError

logger = logging.getLogger(__name__)


@contextmanager
def service_call(action: str):
    try:
        yield
    except DatabaseError as exc:
        logger.exception("Store failure during %s", action, extra={"action": action})
        raise RemoteStoreError(f"Failed to {action}: {exc}") from exc
    except DjangoValidationError as exc:
        raise ValidationError("; ".join(exc.messages)) from exc
