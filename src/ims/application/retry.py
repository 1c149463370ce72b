"""Bounded retry of a whole unit of work on optimistic-concurrency conflicts.

The operation passed in must reload everything it needs on each call;
it is re-applied from scratch, never resumed.
"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

from ims.domain.exceptions import ConcurrencyConflictError, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ATTEMPTS = 3


def retry_on_conflict(operation: Callable[[], T], attempts: int = DEFAULT_ATTEMPTS) -> T:
    """Run ``operation``, retrying only on ConcurrencyConflictError.

    After ``attempts`` failed tries the last conflict is re-raised.
    """
    if attempts < 1:
        raise ValidationError("Retry attempts must be at least 1")

    for attempt in range(1, attempts):
        try:
            return operation()
        except ConcurrencyConflictError as exc:
            logger.warning(
                "Concurrent change on product %s, retrying (%d/%d)",
                exc.product_id, attempt, attempts,
            )

    try:
        return operation()
    except ConcurrencyConflictError as exc:
        logger.warning(
            "Giving up on product %s after %d conflicting attempts",
            exc.product_id, attempts,
        )
        raise
