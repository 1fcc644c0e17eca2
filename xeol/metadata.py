"""Identity and status of an installed end-of-life database."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING, Any, Mapping

if TYPE_CHECKING:
    from .listing import ListingEntry

log = logging.getLogger(__name__)

METADATA_FILE_NAME = "metadata.json"

_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def parse_rfc3339(text: str) -> datetime:
    """Parse an RFC 3339 timestamp and return it in UTC."""
    found = _RFC3339_RE.fullmatch(text) if isinstance(text, str) else None
    if found is None:
        raise ValueError(f"cannot convert built time ({text}): not an RFC 3339 timestamp")
    year, month, day, hour, minute, second, fraction, zone = found.groups()
    micro = int((fraction or "")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
    try:
        moment = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tz)
    except ValueError as exc:
        raise ValueError(f"cannot convert built time ({text}): {exc}") from exc
    return moment.astimezone(timezone.utc)


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(frozen=True)
class Metadata:
    """When a database file was built, its schema version and its checksum."""

    built: datetime
    version: int
    checksum: str = ""

    def is_superseded_by(self, entry: ListingEntry) -> bool:
        """Whether a listing entry is newer than this database."""
        return is_superseded_by(self, entry)

    def to_json(self) -> dict[str, Any]:
        return {
            "built": _as_utc(self.built).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "version": self.version,
            "checksum": self.checksum,
        }

    def write(self, to_path: str) -> None:
        """Write the metadata as JSON to the given path."""
        contents = json.dumps(self.to_json(), indent=1)
        try:
            fd = os.open(to_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(contents)
        except OSError as exc:
            raise OSError(f"failed to write metadata file: {exc}") from exc

    def __str__(self) -> str:
        built = _as_utc(self.built).strftime("%Y-%m-%d %H:%M:%S +0000 UTC")
        return f"Metadata(built={built} version={self.version} checksum={self.checksum})"


@dataclass
class Status:
    """What is known about the installed database, with any validation error."""

    built: datetime | None = None
    schema_version: int = 0
    location: str = ""
    checksum: str = ""
    err: Exception | None = None


def metadata_from_json(data: str | bytes | Mapping[str, Any]) -> Metadata:
    """Build Metadata from JSON text or an already decoded mapping."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid metadata JSON: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ValueError("metadata JSON must be an object")

    built = data.get("built")
    version = data.get("version")
    checksum = data.get("checksum")
    if built is not None and not isinstance(built, str):
        raise ValueError(f"metadata field 'built' has the wrong type: {built!r}")
    if version is not None and (isinstance(version, bool) or not isinstance(version, int)):
        raise ValueError(f"metadata field 'version' has the wrong type: {version!r}")
    if checksum is not None and not isinstance(checksum, str):
        raise ValueError(f"metadata field 'checksum' has the wrong type: {checksum!r}")

    return Metadata(parse_rfc3339(built or ""), version or 0, checksum or "")


def metadata_from_dir(directory: str) -> Metadata | None:
    """Read the metadata file of a database directory; None if there is none."""
    path = os.path.join(directory, METADATA_FILE_NAME)
    try:
        os.stat(path)
    except FileNotFoundError:
        return None
    except OSError as exc:
        raise OSError(f"unable to check if DB metadata path exists ({path}): {exc}") from exc

    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise OSError(f"unable to open DB metadata path ({path}): {exc}") from exc

    try:
        return metadata_from_json(text)
    except ValueError as exc:
        raise ValueError(f"unable to parse DB metadata ({path}): {exc}") from exc


def is_superseded_by(current: Metadata | None, entry: ListingEntry) -> bool:
    """Whether the entry should replace the current database (which may be missing)."""
    if current is None:
        log.debug("cannot find existing metadata, using update...")
        return True

    if entry.version > current.version:
        log.debug("update is a newer version than the current database, using update...")
        return True

    if _as_utc(entry.built) > _as_utc(current.built):
        log.debug(
            "existing database (%s) is older than candidate update (%s), using update...",
            current.built,
            entry.built,
        )
        return True

    log.debug("existing database is already up to date")
    return False