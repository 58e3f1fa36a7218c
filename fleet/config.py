"""Engine configuration, read from an optional YAML file."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml
from jsonschema import validate, ValidationError

from .importer import DEFAULT_DELIMITER, DEFAULT_PART_QUANTITY
from .schemas import load_schema


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class FleetConfig:
    """Settings for imports, availability metrics and logging."""

    delimiter: str = DEFAULT_DELIMITER
    default_part_quantity: float = DEFAULT_PART_QUANTITY
    oee_window_days: float = 90
    oee_clamp: bool = False
    log_level: str = "WARNING"


def load_config(path: Optional[Union[str, Path]] = None) -> FleetConfig:
    """
    Load and validate a config file. Without a path, defaults apply.

    Example:
        import:
          delimiter: ";"
        oee:
          window_days: 30
          clamp: true
        logging:
          level: INFO
    """
    if path is None:
        return FleetConfig()

    p = Path(path)
    if not p.exists():
        raise ConfigError(f"Config file not found: {p}")

    try:
        with open(p) as f:
            data = yaml.safe_load(f) or {}
        validate(instance=data, schema=load_schema("config"))
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error: {e}") from e
    except ValidationError as e:
        location = ".".join(str(part) for part in e.path)
        suffix = f" (at {location})" if location else ""
        raise ConfigError(f"Invalid config: {e.message}{suffix}") from e

    imports = data.get("import") or {}
    oee = data.get("oee") or {}
    logging_section = data.get("logging") or {}
    defaults = FleetConfig()
    return FleetConfig(
        delimiter=imports.get("delimiter", defaults.delimiter),
        default_part_quantity=imports.get(
            "default_part_quantity", defaults.default_part_quantity
        ),
        oee_window_days=oee.get("window_days", defaults.oee_window_days),
        oee_clamp=oee.get("clamp", defaults.oee_clamp),
        log_level=logging_section.get("level", defaults.log_level),
    )
