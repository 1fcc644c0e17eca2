"""A nullable string column value with JSON conversion."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from typing import Any

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _default(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    raise TypeError(f"object of type {type(value).__name__} is not JSON serializable")


def _marshal(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"), allow_nan=False, default=_default)
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


@dataclass(frozen=True)
class NullString:
    """A string that may be absent (SQL NULL)."""

    string: str = ""
    valid: bool = False

    def to_bytes(self) -> bytes:
        return self.string.encode() if self.valid else b"null"

    def to_json(self) -> str:
        return _marshal(self.string) if self.valid else "null"


def to_null_string(value: Any) -> NullString:
    """Store strings as is and anything else as compact JSON; None and "null" become NULL."""
    if value is None:
        return NullString()
    text = value if isinstance(value, str) else _marshal(value)
    if text == "null":
        return NullString()
    return NullString(text, True)


def null_string_from_json(data: str | bytes | None) -> NullString:
    """Wrap raw JSON text; the literal null becomes NULL."""
    if data is None:
        return NullString()
    if isinstance(data, bytes):
        data = data.decode()
    if data == "null":
        return NullString()
    return NullString(data, True)