"""MaintenanceLog class for completed maintenance records."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .part import MaintenancePart
from .status import OrderType


@dataclass(frozen=True)
class MaintenanceLog:
    """
    A record of completed maintenance with its cost snapshot.

    downtime_cost and total_cost are None on import payloads until the
    store prices the record on insertion. Logs never change once built;
    use dataclasses.replace to derive a new one.
    """

    vehicle_id: str
    creation_date: datetime
    completion_date: datetime
    mileage: float
    type: OrderType
    description: str
    parts: Tuple[MaintenancePart, ...] = ()
    labor_cost: float = 0
    downtime_cost: Optional[float] = None
    total_cost: Optional[float] = None
    service_order_id: Optional[str] = None
    id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "parts", tuple(self.parts or ()))
