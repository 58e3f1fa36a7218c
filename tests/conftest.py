"""Shared fixtures for the fleet engine tests."""

import pytest

from fleet import FleetStore, MaintenancePart, MaintenanceRoutine, Vehicle


@pytest.fixture
def store():
    return FleetStore()


@pytest.fixture
def truck(store):
    """A stored vehicle costing 300 per day out of service."""
    return store.add_vehicle(
        Vehicle("TRK-001", "Freightliner", "Cascadia", 2021, 150000, 300)
    )


@pytest.fixture
def oil_change():
    return MaintenanceRoutine(
        name="Cambio de Aceite (Motor)",
        frequency_mileage=25000,
        parts=[
            MaintenancePart("Filtro de Aceite", 40, 1),
            MaintenancePart("Aceite Sintetico (Galon)", 25, 10),
        ],
        labor_hours=3,
        labor_cost=150,
    )
