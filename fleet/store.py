"""FleetStore - the in-memory collections of the fleet and their rules."""

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from .calculations import calculate_oee, to_utc
from .errors import NotFound
from .lifecycle import (
    ClosureData,
    build_closure_log,
    check_advance,
    check_close,
    order_from_routine,
    price_imported_log,
)
from .maintenance_log import MaintenanceLog
from .routine import MaintenanceRoutine
from .service_order import ServiceOrder
from .status import OrderStatus
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


class FleetStore:
    """
    Vehicles, routines, service orders and logs of one fleet.

    Entities are copied on the way in and on the way out, so callers never
    hold a stored record. Order status changes only through advance_order
    and close_order. Logs are immutable and are handed out as they are.
    Dates are stored in UTC. Every mutation holds the writer lock for its
    whole duration.
    """

    def __init__(self, oee_clamp: bool = False):
        self.oee_clamp = oee_clamp
        self._vehicles: Dict[str, Vehicle] = {}
        self._routines: Dict[str, MaintenanceRoutine] = {}
        self._orders: Dict[str, ServiceOrder] = {}
        self._logs: Dict[str, MaintenanceLog] = {}
        self._lock = threading.RLock()

    # =========================================================================
    # Listings
    # =========================================================================

    @property
    def vehicles(self) -> List[Vehicle]:
        return [v.copy() for v in self._vehicles.values()]

    @property
    def routines(self) -> List[MaintenanceRoutine]:
        return [r.copy() for r in self._routines.values()]

    @property
    def service_orders(self) -> List[ServiceOrder]:
        return [o.copy() for o in self._orders.values()]

    @property
    def logs(self) -> List[MaintenanceLog]:
        return list(self._logs.values())

    # =========================================================================
    # Vehicles
    # =========================================================================

    def _vehicle(self, vehicle_id: str) -> Vehicle:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is None:
            raise NotFound("Vehicle", vehicle_id)
        return vehicle

    def find_vehicle(self, vehicle_id: str) -> Optional[Vehicle]:
        vehicle = self._vehicles.get(vehicle_id)
        return vehicle.copy() if vehicle is not None else None

    def get_vehicle(self, vehicle_id: str) -> Vehicle:
        return self._vehicle(vehicle_id).copy()

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        """Store a new vehicle with a fresh id. Plates are not deduplicated."""
        with self._lock:
            stored = vehicle.copy()
            stored.id = new_id()
            stored.is_active = True
            self._vehicles[stored.id] = stored
            return stored.copy()

    def update_vehicle(self, vehicle: Vehicle) -> Vehicle:
        with self._lock:
            self._vehicle(vehicle.id)
            stored = vehicle.copy()
            self._vehicles[stored.id] = stored
            return stored.copy()

    def delete_vehicle(self, vehicle_id: str) -> None:
        """Remove a vehicle along with its service orders and logs."""
        self.bulk_delete_vehicles([vehicle_id])

    def bulk_delete_vehicles(self, vehicle_ids: Iterable[str]) -> None:
        """Remove several vehicles. Nothing is removed if any id is unknown."""
        with self._lock:
            ids = set(vehicle_ids)
            for vehicle_id in ids:
                self._vehicle(vehicle_id)

            for vehicle_id in ids:
                del self._vehicles[vehicle_id]
            self._orders = {
                k: o for k, o in self._orders.items() if o.vehicle_id not in ids
            }
            self._logs = {
                k: log for k, log in self._logs.items() if log.vehicle_id not in ids
            }
            logger.info("Deleted %d vehicle(s) with their orders and logs", len(ids))

    def toggle_vehicle_status(self, vehicle_id: str) -> Vehicle:
        with self._lock:
            vehicle = self._vehicle(vehicle_id)
            vehicle.is_active = not vehicle.is_active
            return vehicle.copy()

    def bulk_add_vehicles(self, vehicles: Iterable[Optional[Vehicle]]) -> List[Vehicle]:
        """Insert imported vehicles, each with a fresh id. None entries are skipped."""
        with self._lock:
            added = []
            for vehicle in vehicles:
                if vehicle is None:
                    continue
                stored = vehicle.copy()
                stored.id = new_id()
                self._vehicles[stored.id] = stored
                added.append(stored.copy())
            logger.debug("Bulk added %d vehicle(s)", len(added))
            return added

    # =========================================================================
    # Routines
    # =========================================================================

    def _routine(self, routine_id: str) -> MaintenanceRoutine:
        routine = self._routines.get(routine_id)
        if routine is None:
            raise NotFound("Routine", routine_id)
        return routine

    def get_routine(self, routine_id: str) -> MaintenanceRoutine:
        return self._routine(routine_id).copy()

    def add_routine(self, routine: MaintenanceRoutine) -> MaintenanceRoutine:
        with self._lock:
            stored = routine.copy()
            stored.id = new_id()
            self._routines[stored.id] = stored
            return stored.copy()

    def update_routine(self, routine: MaintenanceRoutine) -> MaintenanceRoutine:
        """Replace a routine. Orders already created from it keep their copy."""
        with self._lock:
            self._routine(routine.id)
            stored = routine.copy()
            self._routines[stored.id] = stored
            return stored.copy()

    def delete_routine(self, routine_id: str) -> None:
        with self._lock:
            self._routine(routine_id)
            del self._routines[routine_id]

    def bulk_add_routines(
        self, routines: Iterable[Optional[MaintenanceRoutine]]
    ) -> List[MaintenanceRoutine]:
        with self._lock:
            added = []
            for routine in routines:
                if routine is None:
                    continue
                stored = routine.copy()
                stored.id = new_id()
                self._routines[stored.id] = stored
                added.append(stored.copy())
            logger.debug("Bulk added %d routine(s)", len(added))
            return added

    def routines_sorted(self) -> List[MaintenanceRoutine]:
        return sorted(self.routines, key=lambda r: r.name)

    # =========================================================================
    # Service orders
    # =========================================================================

    def _order(self, order_id: str) -> ServiceOrder:
        order = self._orders.get(order_id)
        if order is None:
            raise NotFound("ServiceOrder", order_id)
        return order

    def get_service_order(self, order_id: str) -> ServiceOrder:
        return self._order(order_id).copy()

    def add_service_order(self, order: ServiceOrder) -> ServiceOrder:
        """Open a new order. The vehicle must exist; status starts Abierta."""
        with self._lock:
            self._vehicle(order.vehicle_id)
            stored = order.copy()
            stored.id = new_id()
            stored.status = OrderStatus.ABIERTA
            stored.creation_date = to_utc(stored.creation_date)
            stored.planned_exit_date = to_utc(stored.planned_exit_date)
            self._orders[stored.id] = stored
            return stored.copy()

    def create_order_from_routine(
        self,
        routine_id: str,
        vehicle_id: str,
        creation_date: datetime,
        planned_exit_date: datetime,
    ) -> ServiceOrder:
        """Open a Preventivo order from a snapshot of a routine."""
        with self._lock:
            order = order_from_routine(
                self._routine(routine_id), vehicle_id, creation_date, planned_exit_date
            )
            return self.add_service_order(order)

    def advance_order(self, order_id: str, status: OrderStatus) -> ServiceOrder:
        """
        Move an order forward without closing it.

        Raises NotFound for unknown orders and InvalidTransition for any
        backward move, any move out of Cerrada, or a move to Cerrada.
        """
        with self._lock:
            order = self._order(order_id)
            if check_advance(order, status):
                order.status = status
            return order.copy()

    def close_order(self, order_id: str, closure: ClosureData) -> MaintenanceLog:
        """
        Close an order in progress and record its maintenance log.

        The log is priced and built before anything changes; then the log
        is stored, the order becomes Cerrada and the vehicle takes the
        closure mileage.
        """
        with self._lock:
            order = self._order(order_id)
            vehicle = self._vehicle(order.vehicle_id)
            check_close(order)

            closure = replace(closure, completion_date=to_utc(closure.completion_date))
            log = self._store_log(build_closure_log(order, vehicle, closure))

            order.status = OrderStatus.CERRADA
            # Lower readings are accepted as-is.
            vehicle.mileage = closure.mileage
            logger.info(
                "Closed order %s for %s: total %.2f", order.id, vehicle.name, log.total_cost
            )
            return log

    def service_orders_for_vehicle(self, vehicle_id: str) -> List[ServiceOrder]:
        return [o.copy() for o in self._orders.values() if o.vehicle_id == vehicle_id]

    def service_orders_by_status(
        self, status: Optional[OrderStatus] = None
    ) -> List[ServiceOrder]:
        """Orders newest first, optionally limited to one status."""
        orders = [
            o.copy()
            for o in self._orders.values()
            if status is None or o.status == status
        ]
        return sorted(orders, key=lambda o: to_utc(o.creation_date), reverse=True)

    # =========================================================================
    # Logs
    # =========================================================================

    def _store_log(self, log: MaintenanceLog) -> MaintenanceLog:
        stored = replace(
            log,
            id=new_id(),
            creation_date=to_utc(log.creation_date),
            completion_date=to_utc(log.completion_date),
        )
        self._logs[stored.id] = stored
        return stored

    def logs_for_vehicle(self, vehicle_id: str) -> List[MaintenanceLog]:
        """A vehicle's maintenance history, latest completion first."""
        logs = [log for log in self._logs.values() if log.vehicle_id == vehicle_id]
        return sorted(logs, key=lambda log: to_utc(log.completion_date), reverse=True)

    def bulk_add_logs(
        self, logs: Iterable[Optional[MaintenanceLog]]
    ) -> List[MaintenanceLog]:
        """
        Insert imported logs, pricing each against its own vehicle.

        Logs for unknown vehicles are skipped, the rest still go in.
        """
        with self._lock:
            added = []
            for log in logs:
                if log is None:
                    continue
                vehicle = self._vehicles.get(log.vehicle_id)
                if vehicle is None:
                    logger.warning(
                        "Skipping imported log for unknown vehicle '%s'", log.vehicle_id
                    )
                    continue
                added.append(self._store_log(price_imported_log(log, vehicle)))
            logger.debug("Bulk added %d log(s)", len(added))
            return added

    # =========================================================================
    # Metrics
    # =========================================================================

    def calculate_oee(
        self, vehicle_id: str, days: float, now: Optional[datetime] = None
    ) -> float:
        """Availability percentage of a vehicle over the trailing `days`."""
        self._vehicle(vehicle_id)
        logs = [log for log in self._logs.values() if log.vehicle_id == vehicle_id]
        return calculate_oee(logs, days, now=now, clamp=self.oee_clamp)
