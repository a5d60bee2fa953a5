"""
Order lifecycle state machine

Valid transitions enforce the fulfillment flow:

    PENDING -> PAGATO -> SPEDITO -> CONSEGNATO

with ANNULLATO reachable from every non-terminal status. CONSEGNATO and
ANNULLATO are terminal.
"""
import enum
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from storefront.exceptions import InvalidStatusError, InvalidTransitionError


class OrderStatus(str, enum.Enum):
    """Order status values, stored verbatim in the database"""
    PENDING = "PENDING"
    PAGATO = "PAGATO"
    SPEDITO = "SPEDITO"
    CONSEGNATO = "CONSEGNATO"
    ANNULLATO = "ANNULLATO"


# Current status -> allowed next statuses
VALID_TRANSITIONS: Dict[OrderStatus, Tuple[OrderStatus, ...]] = {
    OrderStatus.PENDING: (OrderStatus.PAGATO, OrderStatus.ANNULLATO),
    OrderStatus.PAGATO: (OrderStatus.SPEDITO, OrderStatus.ANNULLATO),
    OrderStatus.SPEDITO: (OrderStatus.CONSEGNATO, OrderStatus.ANNULLATO),
    OrderStatus.CONSEGNATO: (),  # terminal
    OrderStatus.ANNULLATO: (),  # terminal
}

STATUS_VALUES: List[str] = [s.value for s in OrderStatus]


def parse_status(value) -> OrderStatus:
    """
    Convert a raw value into an OrderStatus

    Matching is exact and case-sensitive.

    Raises:
        InvalidStatusError: If value is not an enumeration member
    """
    if isinstance(value, OrderStatus):
        return value
    if isinstance(value, str) and value in STATUS_VALUES:
        return OrderStatus(value)
    raise InvalidStatusError(value, STATUS_VALUES)


def allowed_transitions(status) -> List[OrderStatus]:
    """Statuses reachable in one step from status"""
    return list(VALID_TRANSITIONS[parse_status(status)])


def is_terminal(status) -> bool:
    return not VALID_TRANSITIONS[parse_status(status)]


def is_valid_transition(current, requested) -> bool:
    return parse_status(requested) in VALID_TRANSITIONS[parse_status(current)]


def validate_transition(current, requested) -> OrderStatus:
    """
    Check that requested is reachable from current

    Returns:
        The requested status as an OrderStatus

    Raises:
        InvalidStatusError: If either value is not an enumeration member
        InvalidTransitionError: If the transition is not in the allow-list
    """
    current_status = parse_status(current)
    requested_status = parse_status(requested)
    allowed = VALID_TRANSITIONS[current_status]
    if requested_status not in allowed:
        raise InvalidTransitionError(
            current_status.value,
            requested_status.value,
            [s.value for s in allowed],
        )
    return requested_status


def _as_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def next_timestamp(previous: Optional[datetime], now: Optional[datetime] = None) -> datetime:
    """A UTC timestamp strictly greater than previous"""
    now = _as_utc(now or datetime.now(timezone.utc))
    if previous is not None:
        previous = _as_utc(previous)
        if now <= previous:
            now = previous + timedelta(microseconds=1)
    return now


def apply_transition(order, requested, now: Optional[datetime] = None) -> OrderStatus:
    """
    Move order to the requested status

    The order is only mutated when the transition is valid. On success
    ``order.status`` holds the new value and ``order.updated_at`` is
    strictly later than before.

    Args:
        order: Object with ``status`` and ``updated_at`` attributes
        requested: Target status (OrderStatus or its exact string value)
        now: Clock override

    Returns:
        The new status
    """
    new_status = validate_transition(order.status, requested)
    order.updated_at = next_timestamp(order.updated_at, now)
    order.status = new_status.value
    return new_status
