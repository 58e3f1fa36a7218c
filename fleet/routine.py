"""MaintenanceRoutine class for reusable maintenance templates."""

from typing import List, Optional

from .part import MaintenancePart, copy_parts


class MaintenanceRoutine:
    """A maintenance template: interval, labor and bill of materials."""

    def __init__(
        self,
        name: str,
        frequency_mileage: float,
        parts: Optional[List[MaintenancePart]] = None,
        labor_hours: float = 0,
        labor_cost: float = 0,
        id: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.frequency_mileage = frequency_mileage
        self.parts = copy_parts(parts)
        self.labor_hours = labor_hours
        self.labor_cost = labor_cost

    def copy(self) -> "MaintenanceRoutine":
        return MaintenanceRoutine(
            self.name,
            self.frequency_mileage,
            self.parts,
            self.labor_hours,
            self.labor_cost,
            self.id,
        )
