"""
Service order lifecycle rules.

Orders move Abierta -> En Progreso -> Cerrada and never go back. Closing
is its own operation because it is the only way a MaintenanceLog comes
out of an order. These functions validate and build; FleetStore applies
the results.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from .calculations import downtime_cost, log_total
from .errors import InvalidTransition
from .maintenance_log import MaintenanceLog
from .part import MaintenancePart, copy_parts
from .routine import MaintenanceRoutine
from .service_order import ServiceOrder
from .status import OrderStatus, OrderType
from .vehicle import Vehicle


@dataclass
class ClosureData:
    """What the workshop reports when an order is closed."""

    completion_date: datetime
    mileage: float
    labor_cost: float
    parts: List[MaintenancePart] = field(default_factory=list)


def check_advance(order: ServiceOrder, new_status: OrderStatus) -> bool:
    """
    Validate a status change requested through advance.

    Returns False when the order already has new_status (nothing to do),
    True when the change is allowed. Raises InvalidTransition otherwise.
    """
    current = order.status
    if current == OrderStatus.CERRADA:
        raise InvalidTransition(order.id, current, new_status, "order is closed")
    if new_status == current:
        return False
    if new_status == OrderStatus.CERRADA:
        raise InvalidTransition(
            order.id, current, new_status, "use close to finish an order"
        )
    if new_status.rank < current.rank:
        raise InvalidTransition(order.id, current, new_status, "orders cannot reopen")
    return True


def check_close(order: ServiceOrder) -> None:
    """Only orders in progress can be closed."""
    if order.status != OrderStatus.EN_PROGRESO:
        reason = "order is closed" if order.is_closed else "order has not started"
        raise InvalidTransition(order.id, order.status, OrderStatus.CERRADA, reason)


def build_closure_log(
    order: ServiceOrder, vehicle: Vehicle, closure: ClosureData
) -> MaintenanceLog:
    """Price the closure and build the log for it. Mutates nothing."""
    downtime = downtime_cost(
        order.type,
        order.creation_date,
        closure.completion_date,
        vehicle.daily_operation_cost,
    )
    return MaintenanceLog(
        vehicle_id=vehicle.id,
        creation_date=order.creation_date,
        completion_date=closure.completion_date,
        mileage=closure.mileage,
        type=order.type,
        description=order.description,
        parts=closure.parts,
        labor_cost=closure.labor_cost,
        downtime_cost=downtime,
        total_cost=log_total(closure.parts, closure.labor_cost, downtime),
        service_order_id=order.id,
    )


def price_imported_log(log: MaintenanceLog, vehicle: Vehicle) -> MaintenanceLog:
    """Copy of an imported log with downtime and total cost filled in."""
    downtime = downtime_cost(
        log.type, log.creation_date, log.completion_date, vehicle.daily_operation_cost
    )
    return MaintenanceLog(
        vehicle_id=log.vehicle_id,
        creation_date=log.creation_date,
        completion_date=log.completion_date,
        mileage=log.mileage,
        type=log.type,
        description=log.description,
        parts=log.parts,
        labor_cost=log.labor_cost,
        downtime_cost=downtime,
        total_cost=log_total(log.parts, log.labor_cost, downtime),
        service_order_id=log.service_order_id,
    )


def order_from_routine(
    routine: MaintenanceRoutine,
    vehicle_id: str,
    creation_date: datetime,
    planned_exit_date: datetime,
) -> ServiceOrder:
    """
    Preventivo order seeded from a routine.

    The order gets its own copy of the parts, so later edits to either
    side never reach the other.
    """
    return ServiceOrder(
        vehicle_id=vehicle_id,
        creation_date=creation_date,
        planned_exit_date=planned_exit_date,
        type=OrderType.PREVENTIVO,
        description=routine.name,
        parts=copy_parts(routine.parts),
        labor_hours=routine.labor_hours,
        labor_cost=routine.labor_cost,
    )
