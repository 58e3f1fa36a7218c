"""Cost, downtime and availability calculations."""

import math
from datetime import datetime, timezone
from typing import Iterable, Optional

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from .status import OrderType

SECONDS_PER_DAY = 24 * 60 * 60


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_datetime(text: str) -> datetime:
    """Parse an ISO 8601 date or datetime string into aware UTC."""
    return to_utc(isoparse(text.strip()))


def elapsed_days(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative if end is earlier)."""
    return (to_utc(end) - to_utc(start)).total_seconds() / SECONDS_PER_DAY


def parts_cost(parts: Iterable) -> float:
    """Sum of cost * quantity. Negative values are not clamped."""
    return sum(part.cost * part.quantity for part in parts)


def order_total(parts: Iterable, labor_cost: float) -> float:
    """Estimated total of a service order: parts plus labor."""
    return parts_cost(parts) + labor_cost


def downtime_days(creation_date: datetime, completion_date: datetime) -> int:
    """
    Whole days a vehicle was out of service, rounded up.

    Never less than 1, even when completion precedes creation.
    """
    return max(1, math.ceil(elapsed_days(creation_date, completion_date)))


def downtime_cost(
    order_type: OrderType,
    creation_date: datetime,
    completion_date: datetime,
    daily_operation_cost: float,
) -> float:
    """Opportunity cost of the downtime. Preventivo work is never charged."""
    if order_type != OrderType.CORRECTIVO:
        return 0
    return downtime_days(creation_date, completion_date) * daily_operation_cost


def log_total(parts: Iterable, labor_cost: float, downtime: float) -> float:
    """Total cost of a maintenance log: parts + labor + downtime."""
    return parts_cost(parts) + labor_cost + downtime


def calculate_oee(
    logs: Iterable,
    days: float,
    now: Optional[datetime] = None,
    clamp: bool = False,
) -> float:
    """
    Availability percentage over the trailing window of `days`.

    Logs are selected by creation_date inside [now - days, now] and each
    contributes its full duration, not clipped to the window. The result
    is floored at 0. It is only capped at 100 when clamp is set, so logs
    completed before they were created can push it above 100.
    """
    if days <= 0:
        raise ValueError(f"OEE window must be positive, got {days}")

    now = to_utc(now) if now else datetime.now(timezone.utc)
    since = now - relativedelta(days=days)

    total_downtime_days = 0.0
    for log in logs:
        created = to_utc(log.creation_date)
        if since <= created <= now:
            total_downtime_days += elapsed_days(created, log.completion_date)

    availability = max(0.0, (days - total_downtime_days) / days * 100)
    if clamp:
        availability = min(100.0, availability)
    return availability
