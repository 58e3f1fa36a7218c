"""
Fleet maintenance engine.

This package provides the domain engine for a vehicle fleet:
- OrderStatus / OrderType: Service order state and maintenance type
- Vehicle, MaintenanceRoutine, ServiceOrder, MaintenanceLog: Entities
- MaintenancePart: Part lines embedded in routines, orders and logs
- calculations: Order totals, downtime cost and availability (OEE)
- lifecycle: Abierta -> En Progreso -> Cerrada rules and closure logs
- FleetStore: In-memory collections with cascades and bulk inserts
- importer: CSV parsers for vehicles, logs and routines
"""

from .status import OrderStatus, OrderType
from .errors import FleetError, NotFound, InvalidTransition, ValidationError
from .part import MaintenancePart
from .vehicle import Vehicle
from .routine import MaintenanceRoutine
from .service_order import ServiceOrder
from .maintenance_log import MaintenanceLog
from .calculations import (
    parts_cost,
    order_total,
    downtime_days,
    downtime_cost,
    log_total,
    calculate_oee,
    parse_datetime,
)
from .lifecycle import ClosureData, order_from_routine
from .store import FleetStore
from .importer import parse_vehicles_csv, parse_logs_csv, parse_routines_csv
from .config import ConfigError, FleetConfig, load_config
from .summary import FleetSummary, fleet_summary

__all__ = [
    "OrderStatus",
    "OrderType",
    "FleetError",
    "NotFound",
    "InvalidTransition",
    "ValidationError",
    "MaintenancePart",
    "Vehicle",
    "MaintenanceRoutine",
    "ServiceOrder",
    "MaintenanceLog",
    "parts_cost",
    "order_total",
    "downtime_days",
    "downtime_cost",
    "log_total",
    "calculate_oee",
    "parse_datetime",
    "ClosureData",
    "order_from_routine",
    "FleetStore",
    "parse_vehicles_csv",
    "parse_logs_csv",
    "parse_routines_csv",
    "ConfigError",
    "FleetConfig",
    "load_config",
    "FleetSummary",
    "fleet_summary",
]
