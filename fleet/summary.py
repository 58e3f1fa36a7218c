"""Fleet-wide dashboard figures."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

from .service_order import ServiceOrder
from .status import OrderStatus
from .store import FleetStore

RECENT_ORDERS = 5


@dataclass
class FleetSummary:
    """Headline numbers for the whole fleet."""

    active_vehicles: int
    open_orders: int
    total_cost: float
    window_days: float
    average_oee: float
    vehicle_oee: List[Tuple[str, float]] = field(default_factory=list)
    recent_orders: List[ServiceOrder] = field(default_factory=list)


def fleet_summary(
    store: FleetStore, window_days: float = 90, now: Optional[datetime] = None
) -> FleetSummary:
    """
    Summarize the fleet.

    OEE is computed for active vehicles only; the average is 0 when there
    are none. Open orders are all orders not yet Cerrada.
    """
    active = [v for v in store.vehicles if v.is_active]
    vehicle_oee = [
        (v.name, store.calculate_oee(v.id, window_days, now=now)) for v in active
    ]
    average = (
        sum(oee for _, oee in vehicle_oee) / len(vehicle_oee) if vehicle_oee else 0
    )
    orders = store.service_orders
    return FleetSummary(
        active_vehicles=len(active),
        open_orders=sum(1 for o in orders if o.status != OrderStatus.CERRADA),
        total_cost=sum(log.total_cost for log in store.logs),
        window_days=window_days,
        average_oee=average,
        vehicle_oee=vehicle_oee,
        recent_orders=list(reversed(orders))[:RECENT_ORDERS],
    )
