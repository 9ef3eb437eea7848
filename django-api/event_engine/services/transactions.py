"""Transaction boundary shared by the engine services."""

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from event_engine.domain.errors import InvalidIdError, TransactionFailureError, ValidationError
from event_engine.domain.value_objects import TimeWindow
from event_engine.stores.interfaces import EventStore

logger = logging.getLogger(__name__)

T = TypeVar("T")
IdT = TypeVar("IdT")


def run_atomic(
    store: EventStore,
    work: Callable[[], T],
    *,
    label: str,
    max_attempts: int = 3,
    retry_backoff: float = 0.05,
) -> T:
    """Run ``work`` in one store transaction, retrying transient failures.

    A failed attempt is rolled back in full before the next one starts.

    Raises:
        TransactionFailureError: When every attempt failed to commit.
    """
    attempt = 1
    while True:
        try:
            with store.atomic():
                return work()
        except TransactionFailureError as exc:
            if attempt >= max_attempts:
                logger.exception("%s failed after %d attempt(s)", label, attempt)
                raise TransactionFailureError(attempts=attempt) from exc
            logger.warning(
                "%s hit a transient storage error, retrying (%d/%d)", label, attempt, max_attempts
            )
            time.sleep(retry_backoff * attempt)
            attempt += 1


def parse_id(id_type: type[IdT], value, field: str) -> IdT:
    """Parse a UUID-backed identifier, mapping bad input to InvalidIdError."""
    try:
        return id_type.from_string(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidIdError(field) from None


def require_window(window: TimeWindow | None) -> None:
    if window is not None and window.is_empty:
        raise ValidationError("Time window must have a positive duration", field="window")
