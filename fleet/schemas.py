"""Loading of the bundled JSON schemas."""

from functools import lru_cache
from pathlib import Path

import yaml

SCHEMAS_PATH = Path(__file__).parent / "schemas.yaml"


@lru_cache(maxsize=None)
def _load_all() -> dict:
    with open(SCHEMAS_PATH) as f:
        return yaml.safe_load(f)


def load_schema(name: str) -> dict:
    """Return the schema stored under `name` in schemas.yaml."""
    return _load_all()[name]
