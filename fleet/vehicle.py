"""Vehicle class for fleet units."""

from typing import Optional


class Vehicle:
    """A fleet vehicle identified by plate, with its daily operation cost."""

    def __init__(
        self,
        name: str,
        make: str,
        model: str,
        year: int,
        mileage: float,
        daily_operation_cost: float,
        is_active: bool = True,
        id: Optional[str] = None,
    ):
        self.id = id
        self.name = name
        self.make = make
        self.model = model
        self.year = year
        self.mileage = mileage
        self.daily_operation_cost = daily_operation_cost
        self.is_active = is_active

    @property
    def display_name(self) -> str:
        """Plate followed by make and model."""
        return f"{self.name} - {self.make} {self.model}"

    def copy(self) -> "Vehicle":
        return Vehicle(
            self.name,
            self.make,
            self.model,
            self.year,
            self.mileage,
            self.daily_operation_cost,
            self.is_active,
            self.id,
        )
