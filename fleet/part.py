"""MaintenancePart value object."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MaintenancePart:
    """A part line: name, unit cost and quantity. Immutable value data."""

    name: str
    cost: float
    quantity: float = 1

    @property
    def line_cost(self) -> float:
        return self.cost * self.quantity


def copy_parts(parts) -> list:
    """A new list of the given parts, never the caller's list itself."""
    return list(parts or [])
