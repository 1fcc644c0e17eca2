"""The published listing of downloadable end-of-life databases."""

from __future__ import annotations

import hashlib
import json
import os
import posixpath
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping
from urllib.parse import urlsplit, urlunsplit

from .metadata import Metadata, parse_rfc3339

LISTING_FILE_NAME = "listing.json"


def _format_built(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass(frozen=True)
class ListingEntry:
    """A database archive: what it holds and where to get and verify it."""

    built: datetime
    version: int
    url: str
    checksum: str

    def to_json(self) -> dict[str, Any]:
        return {
            "built": _format_built(self.built),
            "version": self.version,
            "url": self.url,
            "checksum": self.checksum,
        }

    def __str__(self) -> str:
        return f"Listing(url={self.url})"


def listing_entry_from_json(data: str | bytes | Mapping[str, Any]) -> ListingEntry:
    """Build a ListingEntry from JSON text or an already decoded mapping."""
    if isinstance(data, (str, bytes)):
        data = json.loads(data)
    if not isinstance(data, Mapping):
        raise ValueError("listing entry JSON must be an object")

    built = data.get("built")
    version = data.get("version")
    url = data.get("url")
    checksum = data.get("checksum")
    for key, value in (("built", built), ("url", url), ("checksum", checksum)):
        if value is not None and not isinstance(value, str):
            raise ValueError(f"listing field {key!r} has the wrong type: {value!r}")
    if version is not None and (isinstance(version, bool) or not isinstance(version, int)):
        raise ValueError(f"listing field 'version' has the wrong type: {version!r}")

    moment = parse_rfc3339(built or "")
    try:
        urlsplit(url or "")
    except ValueError as exc:
        raise ValueError(f"cannot parse url ({url}): {exc}") from exc

    return ListingEntry(moment, version or 0, url or "", checksum or "")


def listing_entry_from_archive(metadata: Metadata, archive_path: str, base_url: str) -> ListingEntry:
    """Describe a database archive that will be served under base_url."""
    digest = hashlib.sha256()
    try:
        with open(archive_path, "rb") as handle:
            for chunk in iter(lambda: handle.read(65536), b""):
                digest.update(chunk)
    except OSError as exc:
        raise OSError(f"unable to find db archive checksum: {exc}") from exc

    parts = urlsplit(base_url)
    archive_name = os.path.basename(archive_path)
    joined = posixpath.normpath(posixpath.join(parts.path, archive_name)) if parts.path else archive_name
    file_url = urlunsplit(parts._replace(path=joined))

    return ListingEntry(metadata.built, metadata.version, file_url, "sha256:" + digest.hexdigest())


def _sorted_newest_first(entries: list[ListingEntry]) -> list[ListingEntry]:
    return sorted(entries, key=lambda entry: entry.built, reverse=True)


@dataclass
class Listing:
    """Available database archives grouped by schema version, newest first."""

    available: dict[int, list[ListingEntry]] = field(default_factory=dict)

    def best_update(self, target_schema: int) -> ListingEntry | None:
        """The newest entry for the given schema version, if any."""
        entries = self.available.get(target_schema)
        return entries[0] if entries else None

    def to_json(self) -> dict[str, Any]:
        return {
            "available": {
                str(version): [entry.to_json() for entry in self.available[version]]
                for version in sorted(self.available, key=str)
            }
        }

    def write(self, to_path: str) -> None:
        """Write the listing as JSON to the given path."""
        contents = json.dumps(self.to_json(), indent=1)
        try:
            fd = os.open(to_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(contents)
        except OSError as exc:
            raise OSError(f"failed to write listing file: {exc}") from exc


def new_listing(*entries: ListingEntry) -> Listing:
    """Group entries by schema version, each group sorted newest first."""
    grouped: dict[int, list[ListingEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.version, []).append(entry)
    return Listing({version: _sorted_newest_first(group) for version, group in grouped.items()})


def _listing_from_json(data: Any) -> Listing:
    if not isinstance(data, Mapping):
        raise ValueError("listing JSON must be an object")
    available = data.get("available") or {}
    if not isinstance(available, Mapping):
        raise ValueError("listing field 'available' must be an object")
    grouped: dict[int, list[ListingEntry]] = {}
    for key, entries in available.items():
        if not key.lstrip("-").isdigit():
            raise ValueError(f"invalid schema version key: {key!r}")
        if entries is None:
            entries = []
        if not isinstance(entries, list):
            raise ValueError(f"entries for schema {key} must be a list")
        grouped[int(key)] = _sorted_newest_first([listing_entry_from_json(item) for item in entries])
    return Listing(grouped)


def listing_from_file(path: str) -> Listing:
    """Load a listing from a JSON file."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise OSError(f"unable to open DB listing path: {exc}") from exc

    try:
        return _listing_from_json(json.loads(text))
    except ValueError as exc:
        raise ValueError(f"unable to parse DB listing: {exc}") from exc