"""End-of-life records, store identity and the store reading interface."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Mapping, Protocol, runtime_checkable

SCHEMA_VERSION = 1
EOL_STORE_FILE_NAME = "xeol.db"

_JSON_KEYS = {
    "product_name": "productName",
    "release_date": "releaseDate",
    "release_cycle": "releaseCycle",
    "latest_release_date": "latestReleaseDate",
    "latest_release": "latestRelease",
    "eol": "eol",
    "eol_bool": "eolBool",
}


@dataclass(frozen=True)
class Cycle:
    """One release cycle of a product with its end-of-life information."""

    product_name: str = ""
    release_cycle: str = ""
    eol: str = ""
    eol_bool: bool = False
    latest_release: str = ""
    latest_release_date: str = ""
    release_date: str = ""

    def is_empty(self) -> bool:
        return self == Cycle()

    def to_json(self) -> dict[str, Any]:
        """The cycle as a JSON-ready mapping with the wire field names."""
        return {json_key: getattr(self, attr) for attr, json_key in _JSON_KEYS.items()}


def cycle_from_json(data: str | bytes | Mapping[str, Any]) -> Cycle:
    """Build a Cycle from JSON text or an already decoded mapping."""
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("cycle JSON must be an object")
    values: dict[str, Any] = {}
    for item in fields(Cycle):
        key = _JSON_KEYS[item.name]
        if key not in data or data[key] is None:
            continue
        value = data[key]
        expected = bool if item.name == "eol_bool" else str
        if not isinstance(value, expected):
            raise ValueError(f"cycle field {key!r} has the wrong type: {value!r}")
        values[item.name] = value
    return Cycle(**values)


@dataclass(frozen=True)
class Product:
    id: int
    name: str


@dataclass(frozen=True)
class DatabaseID:
    """When a database was built and which schema it follows."""

    build_timestamp: datetime
    schema_version: int


def new_id(age: datetime) -> DatabaseID:
    """An identity for a database built at the given time, in UTC."""
    return DatabaseID(age.astimezone(timezone.utc), SCHEMA_VERSION)


@runtime_checkable
class EolStoreReader(Protocol):
    """Read access to end-of-life cycles."""

    def get_cycles_by_purl(self, purl: str) -> list[Cycle]:
        """Cycles of the product that a short package URL belongs to."""
        ...

    def get_cycles_by_cpe(self, cpe: str) -> list[Cycle]:
        """Cycles of the product that a short CPE belongs to."""
        ...

    def get_all_products(self) -> list[Product]:
        """Every known product."""
        ...