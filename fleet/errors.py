"""Exceptions raised by the fleet engine."""


class FleetError(Exception):
    """Base class for engine errors surfaced to callers."""


class NotFound(FleetError):
    """An operation referenced an id that is not in the store."""

    def __init__(self, kind: str, entity_id: str):
        super().__init__(f"{kind} '{entity_id}' not found")
        self.kind = kind
        self.entity_id = entity_id


class InvalidTransition(FleetError):
    """A service order status change that the lifecycle does not allow."""

    def __init__(self, order_id: str, current, requested, reason: str = ""):
        message = (
            f"Cannot move order '{order_id}' from "
            f"'{current.value}' to '{requested.value}'"
        )
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.order_id = order_id
        self.current = current
        self.requested = requested


class ValidationError(FleetError):
    """An import field failed to parse or decode. Handled per row."""
