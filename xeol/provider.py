"""End-of-life lookups by distribution CPE and package URL over a store."""

from __future__ import annotations

from .distro import Release, destructure_cpe, distro_from_release
from .eol import Cycle, EolStoreReader


class ProviderError(Exception):
    """End-of-life cycles could not be looked up."""


class EolProvider:
    """Finds end-of-life cycles in a store for distributions and packages."""

    def __init__(self, reader: EolStoreReader) -> None:
        self.reader = reader

    def get_by_distro_cpe(self, release: Release | None) -> tuple[str, list[Cycle]]:
        """The distribution version and the cycles of its product."""
        if release is None:
            raise ProviderError("empty distro release")

        try:
            distro = distro_from_release(release)
        except ValueError as exc:
            raise ProviderError(str(exc)) from exc

        if not distro.cpe_name:
            raise ProviderError("empty distro CPEName")

        try:
            short_cpe, version = destructure_cpe(distro.cpe_name)
        except ValueError as exc:
            raise ProviderError("invalid distro CPEName") from exc
        if not version or not short_cpe:
            raise ProviderError("invalid distro CPEName")

        return version, list(self.reader.get_cycles_by_cpe(short_cpe) or [])

    def get_by_short_purl(self, short_purl: str) -> list[Cycle]:
        """The cycles of the product a short package URL belongs to."""
        return list(self.reader.get_cycles_by_purl(short_purl) or [])