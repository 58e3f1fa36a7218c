#!/usr/bin/env python3
"""Tests for the entity classes and part copying."""

from dataclasses import FrozenInstanceError, replace
from datetime import datetime

import pytest

from fleet import (
    MaintenanceLog,
    MaintenancePart,
    MaintenanceRoutine,
    OrderStatus,
    OrderType,
    ServiceOrder,
    Vehicle,
)


class TestMaintenancePart:
    """Tests for MaintenancePart."""

    def test_quantity_defaults_to_one(self):
        assert MaintenancePart("Filter", 10).quantity == 1

    def test_line_cost(self):
        assert MaintenancePart("Belt", 50, 2).line_cost == 100

    def test_is_immutable(self):
        part = MaintenancePart("Belt", 50, 2)
        with pytest.raises(FrozenInstanceError):
            part.cost = 60
        assert replace(part, cost=60).line_cost == 120
        assert part.cost == 50


class TestVehicle:
    """Tests for Vehicle."""

    def test_defaults(self):
        vehicle = Vehicle("TRK-001", "Volvo", "VNL 860", 2020, 220000, 320)
        assert vehicle.is_active is True
        assert vehicle.id is None

    def test_display_name(self):
        vehicle = Vehicle("TRK-002", "Volvo", "VNL 860", 2020, 220000, 320)
        assert vehicle.display_name == "TRK-002 - Volvo VNL 860"

    def test_copy_keeps_all_fields(self):
        vehicle = Vehicle("TRK-003", "Kenworth", "T680", 2019, 310000, 350, False, "v3")
        clone = vehicle.copy()
        assert clone is not vehicle
        assert vars(clone) == vars(vehicle)


class TestMaintenanceRoutine:
    """Tests for MaintenanceRoutine."""

    def test_parts_are_copied_on_construction(self):
        parts = [MaintenancePart("Filter", 10)]
        routine = MaintenanceRoutine("Oil", 25000, parts)
        parts.append(MaintenancePart("Gasket", 5))
        assert len(routine.parts) == 1

    def test_copy_does_not_share_parts(self, oil_change):
        clone = oil_change.copy()
        clone.parts.append(MaintenancePart("Gasket", 5))
        assert len(oil_change.parts) == 2

    def test_optional_fields_default(self):
        routine = MaintenanceRoutine("Inspeccion de Frenos", 50000)
        assert routine.parts == []
        assert routine.labor_hours == 0
        assert routine.labor_cost == 0


class TestServiceOrder:
    """Tests for ServiceOrder."""

    def test_starts_open(self):
        order = ServiceOrder(
            "v1",
            datetime(2026, 1, 1),
            datetime(2026, 1, 2),
            OrderType.CORRECTIVO,
            "Fallo en sistema de inyeccion",
        )
        assert order.status == OrderStatus.ABIERTA
        assert order.is_closed is False

    def test_copy_does_not_share_parts(self):
        order = ServiceOrder(
            "v1",
            datetime(2026, 1, 1),
            datetime(2026, 1, 2),
            OrderType.CORRECTIVO,
            "Belt",
            parts=[MaintenancePart("Belt", 50, 2)],
        )
        clone = order.copy()
        clone.parts.append(MaintenancePart("Bolt", 1))
        assert len(order.parts) == 1


class TestMaintenanceLog:
    """Tests for MaintenanceLog."""

    def test_unpriced_by_default(self):
        log = MaintenanceLog(
            "v1",
            datetime(2026, 1, 1),
            datetime(2026, 1, 2),
            148000,
            OrderType.PREVENTIVO,
            "Cambio de aceite",
        )
        assert log.downtime_cost is None
        assert log.total_cost is None
        assert log.service_order_id is None
        assert log.parts == ()

    def test_is_immutable_and_keeps_parts_as_tuple(self):
        parts = [MaintenancePart("Belt", 50, 2)]
        log = MaintenanceLog(
            "v1",
            datetime(2026, 1, 1),
            datetime(2026, 1, 2),
            148000,
            OrderType.CORRECTIVO,
            "Belt",
            parts=parts,
        )
        parts.append(MaintenancePart("Bolt", 1))
        assert log.parts == (MaintenancePart("Belt", 50, 2),)
        with pytest.raises(FrozenInstanceError):
            log.vehicle_id = "v2"
        assert replace(log, vehicle_id="v2").parts == log.parts
