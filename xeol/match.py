"""End-of-life findings that pair a package with a release cycle."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Protocol

from .eol import Cycle

log = logging.getLogger(__name__)

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK64 = (1 << 64) - 1


class MatcherType(enum.StrEnum):
    UNKNOWN = "UnknownMatcherType"
    PACKAGE_MATCHER = "package-matcher"


ALL_MATCHER_TYPES: tuple[MatcherType, ...] = (MatcherType.PACKAGE_MATCHER,)


class CannotMergeError(ValueError):
    """Two matches with different fingerprints cannot be merged."""

    def __init__(self, message: str = "unable to merge eol matches") -> None:
        super().__init__(message)


class _Package(Protocol):
    id: str
    name: str
    version: str
    type: str
    purl: str


def _quote(value: Any) -> str:
    return json.dumps(str(value), ensure_ascii=False)


def _fnv1_64(data: bytes) -> int:
    digest = _FNV_OFFSET
    for byte in data:
        digest = (digest * _FNV_PRIME) & _MASK64
        digest ^= byte
    return digest


@dataclass(frozen=True)
class Fingerprint:
    """What makes a match unique: the cycle and the package it was found for."""

    release_cycle: str
    release_date: str
    package_id: str

    def id(self) -> str:
        """A structural hash of the fingerprint in hexadecimal.

        Only public fields take part in the structural hash and a fingerprint
        has none, so the digest is that of the type name alone.
        """
        return format(_fnv1_64(b"Fingerprint"), "x")

    def __str__(self) -> str:
        return (
            f"Fingerprint(releasecycle={_quote(self.release_cycle)} "
            f"releasedate={_quote(self.release_date)} package={_quote(self.package_id)})"
        )


@dataclass(frozen=True)
class Match:
    """A single package found to belong to a single end-of-life cycle."""

    cycle: Cycle
    package: Any

    def __str__(self) -> str:
        return (
            f"Match(pkg={self.package} releasedate={_quote(self.cycle.release_date)} "
            f"releasecycle={self.cycle.release_cycle} purl={self.package.purl})"
        )

    def summary(self) -> str:
        return (
            f"releasecycle={_quote(self.cycle.release_cycle)} "
            f"releasedate={_quote(self.cycle.release_date)} purl={_quote(self.package.purl)}"
        )

    def fingerprint(self) -> Fingerprint:
        return Fingerprint(self.cycle.release_cycle, self.cycle.release_date, self.package.id)

    def merge(self, other: Match) -> None:
        """Merge another match into this one; raise CannotMergeError if they differ."""
        if other.fingerprint() != self.fingerprint():
            raise CannotMergeError()


def match_sort_key(match: Match) -> tuple[str, str, str, str, str]:
    """Order by product, release cycle, package name, version and type."""
    return (
        match.cycle.product_name,
        match.cycle.release_cycle,
        match.package.name,
        match.package.version,
        match.package.type,
    )


class Matches:
    """A de-duplicated collection of matches, indexed by fingerprint and package."""

    def __init__(self, *matches: Match) -> None:
        self._by_fingerprint: dict[Fingerprint, Match] = {}
        self._by_package: dict[str, list[Fingerprint]] = {}
        self.add(*matches)

    def add(self, *matches: Match) -> None:
        for new_match in matches:
            fingerprint = new_match.fingerprint()
            existing = self._by_fingerprint.get(fingerprint)
            if existing is not None:
                try:
                    existing.merge(new_match)
                except CannotMergeError as exc:
                    log.warning(
                        "unable to merge matches: original=%r new=%r : %s", str(existing), str(new_match), exc
                    )
            else:
                self._by_fingerprint[fingerprint] = new_match
            self._by_package.setdefault(new_match.package.id, []).append(fingerprint)

    def merge(self, other: Matches) -> None:
        """Add every match of another collection to this one."""
        for fingerprints in other._by_package.values():
            for fingerprint in fingerprints:
                self.add(other._by_fingerprint[fingerprint])

    def count(self) -> int:
        return len(self._by_fingerprint)

    def sorted(self) -> list[Match]:
        return sorted(self._by_fingerprint.values(), key=match_sort_key)

    def __iter__(self) -> Iterator[Match]:
        return iter(list(self._by_fingerprint.values()))

    def __len__(self) -> int:
        return self.count()