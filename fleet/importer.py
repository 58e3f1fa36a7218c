"""
Bulk import of vehicles, maintenance logs and routines from CSV text.

Each parser skips the header row, reads the remaining lines positionally
and returns entity payloads without ids, ready for the FleetStore bulk
operations. A bad row is dropped on its own; the rest of the batch still
comes through.

Formats:
  vehicles: name,make,model,year,mileage,dailyOperationCost
  logs:     vehicleId,creationDate,completionDate,mileage,type,description,parts,laborCost
  routines: name,frequencyMileage,laborCost,parts

The routine parts column is a CSV-quoted JSON list, e.g.
  "[{""name"":""Filter"",""cost"":10}]"
"""

import json
import logging
import math
import re
from typing import List, Optional

import jsonschema

from .calculations import parse_datetime
from .errors import ValidationError
from .maintenance_log import MaintenanceLog
from .part import MaintenancePart
from .routine import MaintenanceRoutine
from .schemas import load_schema
from .status import OrderType
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

DEFAULT_DELIMITER = ","
DEFAULT_PART_QUANTITY = 1

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# =============================================================================
# Field helpers
# =============================================================================


def parse_int(text: Optional[str]):
    """Leading integer of text, or nan when there is none ('12km' -> 12)."""
    match = _INT_PREFIX.match(text or "")
    if not match:
        return math.nan
    return int(match.group(1))


def parse_float(text: Optional[str]):
    """Leading decimal number of text, or nan when there is none."""
    match = _FLOAT_PREFIX.match(text or "")
    if not match:
        return math.nan
    return float(match.group(1))


def is_nan(value) -> bool:
    return isinstance(value, float) and math.isnan(value)


def _data_lines(text: str) -> List[str]:
    """All lines after the header, with any carriage return removed."""
    return [line.rstrip("\r") for line in text.split("\n")[1:]]


def _field(fields: List[str], index: int) -> Optional[str]:
    return fields[index] if index < len(fields) else None


def decode_parts_field(
    raw: str, default_quantity: float = DEFAULT_PART_QUANTITY
) -> List[MaintenancePart]:
    """
    Decode a CSV-quoted JSON parts list into MaintenancePart objects.

    Strips one leading and one trailing quote and undoes "" escaping
    before decoding. Raises ValidationError if the result is not a list
    of {name, cost} objects.
    """
    cleaned = raw
    if cleaned.startswith('"'):
        cleaned = cleaned[1:]
    if cleaned.endswith('"'):
        cleaned = cleaned[:-1]
    cleaned = cleaned.replace('""', '"')

    try:
        data = json.loads(cleaned)
        jsonschema.validate(instance=data, schema=load_schema("routine_parts"))
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid parts JSON: {e}") from e
    except jsonschema.ValidationError as e:
        raise ValidationError(f"Invalid parts list: {e.message}") from e

    return [
        MaintenancePart(
            item["name"], item["cost"], item.get("quantity", default_quantity)
        )
        for item in data
    ]


# =============================================================================
# Row parsers
# =============================================================================


def parse_vehicle_row(line: str, delimiter: str = DEFAULT_DELIMITER) -> Optional[Vehicle]:
    fields = line.split(delimiter)
    name = fields[0]
    if not name:
        return None
    return Vehicle(
        name=name,
        make=_field(fields, 1),
        model=_field(fields, 2),
        year=parse_int(_field(fields, 3)),
        mileage=parse_int(_field(fields, 4)),
        daily_operation_cost=parse_float(_field(fields, 5)),
        is_active=True,
    )


def parse_log_row(line: str, delimiter: str = DEFAULT_DELIMITER) -> Optional[MaintenanceLog]:
    """Parts are never imported for logs; the parts column is skipped."""
    fields = line.split(delimiter)
    vehicle_id = fields[0]
    if not vehicle_id:
        return None

    try:
        creation_date = parse_datetime(_field(fields, 1) or "")
        completion_date = parse_datetime(_field(fields, 2) or "")
    except (ValueError, OverflowError) as e:
        logger.warning("Skipping log row for '%s': bad date (%s)", vehicle_id, e)
        return None

    type_text = (_field(fields, 4) or "").strip()
    try:
        order_type = OrderType(type_text)
    except ValueError:
        logger.warning(
            "Skipping log row for '%s': unknown type '%s'", vehicle_id, type_text
        )
        return None

    return MaintenanceLog(
        vehicle_id=vehicle_id,
        creation_date=creation_date,
        completion_date=completion_date,
        mileage=parse_int(_field(fields, 3)),
        type=order_type,
        description=_field(fields, 5) or "",
        parts=[],
        labor_cost=parse_float(_field(fields, 7)),
    )


def parse_routine_row(
    line: str,
    delimiter: str = DEFAULT_DELIMITER,
    default_quantity: float = DEFAULT_PART_QUANTITY,
) -> Optional[MaintenanceRoutine]:
    fields = line.split(delimiter)
    if len(fields) < 3:
        return None

    name = fields[0]
    frequency_mileage = parse_int(fields[1])
    labor_cost = parse_float(fields[2])
    if not name or is_nan(frequency_mileage) or is_nan(labor_cost):
        return None

    # The JSON itself may contain the delimiter, so it takes the rest of the line.
    parts_json = delimiter.join(fields[3:])
    parts: List[MaintenancePart] = []
    if parts_json:
        try:
            parts = decode_parts_field(parts_json, default_quantity)
        except ValidationError as e:
            logger.error("Could not parse parts for routine '%s': %s", name, e)
            parts = []

    return MaintenanceRoutine(
        name=name,
        frequency_mileage=frequency_mileage,
        parts=parts,
        labor_cost=labor_cost,
    )


# =============================================================================
# Batch parsers
# =============================================================================


def parse_vehicles_csv(text: str, delimiter: str = DEFAULT_DELIMITER) -> List[Vehicle]:
    """Vehicle payloads from CSV text; rows without a plate are dropped."""
    rows = (parse_vehicle_row(line, delimiter) for line in _data_lines(text))
    return [vehicle for vehicle in rows if vehicle is not None]


def parse_logs_csv(text: str, delimiter: str = DEFAULT_DELIMITER) -> List[MaintenanceLog]:
    """Log payloads from CSV text, unpriced and without parts."""
    rows = (parse_log_row(line, delimiter) for line in _data_lines(text))
    return [log for log in rows if log is not None]


def parse_routines_csv(
    text: str,
    delimiter: str = DEFAULT_DELIMITER,
    default_quantity: float = DEFAULT_PART_QUANTITY,
) -> List[MaintenanceRoutine]:
    """Routine payloads from CSV text, with their embedded parts lists."""
    rows = (
        parse_routine_row(line, delimiter, default_quantity)
        for line in _data_lines(text)
    )
    return [routine for routine in rows if routine is not None]
