"""ServiceOrder class for maintenance work requests."""

from datetime import datetime
from typing import List, Optional

from .part import MaintenancePart, copy_parts
from .status import OrderStatus, OrderType


class ServiceOrder:
    """A work request against one vehicle. Starts Abierta."""

    def __init__(
        self,
        vehicle_id: str,
        creation_date: datetime,
        planned_exit_date: datetime,
        type: OrderType,
        description: str,
        parts: Optional[List[MaintenancePart]] = None,
        labor_hours: float = 0,
        labor_cost: float = 0,
        status: OrderStatus = OrderStatus.ABIERTA,
        id: Optional[str] = None,
    ):
        self.id = id
        self.vehicle_id = vehicle_id
        self.creation_date = creation_date
        # Not checked against creation_date.
        self.planned_exit_date = planned_exit_date
        self.type = type
        self.status = status
        self.description = description
        self.parts = copy_parts(parts)
        self.labor_hours = labor_hours
        self.labor_cost = labor_cost

    @property
    def is_closed(self) -> bool:
        return self.status == OrderStatus.CERRADA

    def copy(self) -> "ServiceOrder":
        return ServiceOrder(
            self.vehicle_id,
            self.creation_date,
            self.planned_exit_date,
            self.type,
            self.description,
            self.parts,
            self.labor_hours,
            self.labor_cost,
            self.status,
            self.id,
        )
