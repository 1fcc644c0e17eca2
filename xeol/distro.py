"""Linux distribution identification, version parsing and CPE helpers."""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass

log = logging.getLogger(__name__)

_MAX_SEGMENT = 2**63 - 1


class DistroType(enum.StrEnum):
    """Supported Linux distributions."""

    DEBIAN = "debian"
    UBUNTU = "ubuntu"
    REDHAT = "redhat"
    CENTOS = "centos"
    FEDORA = "fedora"
    ALPINE = "alpine"
    BUSYBOX = "busybox"
    AMAZON_LINUX = "amazonlinux"
    ORACLE_LINUX = "oraclelinux"
    ARCH_LINUX = "archlinux"
    OPENSUSE_LEAP = "opensuseleap"
    SLES = "sles"
    PHOTON = "photon"
    WINDOWS = "windows"
    MARINER = "mariner"
    ROCKY_LINUX = "rockylinux"
    ALMA_LINUX = "almalinux"
    GENTOO = "gentoo"
    WOLFI = "wolfi"

    def cpe_vendor(self) -> str:
        """Best-effort CPE OS vendor for this distribution."""
        return CPE_OS_VENDORS[self]

    def cpe_product(self) -> str:
        """Best-effort CPE OS product for this distribution."""
        return CPE_OS_PRODUCTS[self]


ID_MAPPING: dict[str, DistroType] = {
    "debian": DistroType.DEBIAN,
    "ubuntu": DistroType.UBUNTU,
    "rhel": DistroType.REDHAT,
    "centos": DistroType.CENTOS,
    "fedora": DistroType.FEDORA,
    "alpine": DistroType.ALPINE,
    "busybox": DistroType.BUSYBOX,
    "amzn": DistroType.AMAZON_LINUX,
    "ol": DistroType.ORACLE_LINUX,
    "arch": DistroType.ARCH_LINUX,
    "opensuse-leap": DistroType.OPENSUSE_LEAP,
    "sles": DistroType.SLES,
    "photon": DistroType.PHOTON,
    "windows": DistroType.WINDOWS,
    "mariner": DistroType.MARINER,
    "rocky": DistroType.ROCKY_LINUX,
    "almalinux": DistroType.ALMA_LINUX,
    "gentoo": DistroType.GENTOO,
    "wolfi": DistroType.WOLFI,
}

# Few distributions set CPE_NAME in /etc/os-release, so these mappings are
# used to synthesise one.
CPE_OS_VENDORS: dict[DistroType, str] = {
    DistroType.DEBIAN: "debian",
    DistroType.UBUNTU: "canonical",
    DistroType.REDHAT: "redhat",
    DistroType.CENTOS: "centos",
    DistroType.FEDORA: "fedoraproject",
    DistroType.ALPINE: "alpinelinux",
    DistroType.BUSYBOX: "busybox",
    DistroType.AMAZON_LINUX: "amazon",
    DistroType.ORACLE_LINUX: "oracle",
    DistroType.ARCH_LINUX: "archlinux",
    DistroType.OPENSUSE_LEAP: "opensuse",
    DistroType.SLES: "suse",
    DistroType.PHOTON: "vmware",
    DistroType.WINDOWS: "microsoft",
    DistroType.MARINER: "microsoft",
    DistroType.ROCKY_LINUX: "rocky",
    DistroType.ALMA_LINUX: "almalinux",
    DistroType.GENTOO: "gentoo",
    DistroType.WOLFI: "wolfi",
}

CPE_OS_PRODUCTS: dict[DistroType, str] = {
    DistroType.DEBIAN: "debian_linux",
    DistroType.UBUNTU: "ubuntu_linux",
    DistroType.REDHAT: "enterprise_linux",
    DistroType.CENTOS: "centos",
    DistroType.FEDORA: "fedora",
    DistroType.ALPINE: "alpine_linux",
    DistroType.BUSYBOX: "busybox",
    DistroType.AMAZON_LINUX: "amazon_linux",
    DistroType.ORACLE_LINUX: "linux",
    DistroType.ARCH_LINUX: "arch_linux",
    DistroType.OPENSUSE_LEAP: "leap",
    DistroType.SLES: "linux_enterprise_server",
    DistroType.PHOTON: "photon_os",
    DistroType.WINDOWS: "windows",
    DistroType.MARINER: "mariner",
    DistroType.ROCKY_LINUX: "rocky",
    DistroType.ALMA_LINUX: "almalinux",
    DistroType.GENTOO: "gentoo",
    DistroType.WOLFI: "wolfi",
}

_ROLLING = frozenset({DistroType.WOLFI, DistroType.ARCH_LINUX, DistroType.GENTOO})


@dataclass(frozen=True)
class Release:
    """Raw release information as found in an os-release file."""

    id: str = ""
    name: str = ""
    pretty_name: str = ""
    version: str = ""
    version_id: str = ""
    version_code_name: str = ""
    id_like: tuple[str, ...] = ()
    cpe_name: str = ""


_VERSION_RE = re.compile(
    r"v?(?P<numbers>[0-9]+(?:\.[0-9]+)*?)"
    r"(?:-(?P<pre_num>[0-9]+[0-9A-Za-z\-~]*(?:\.[0-9A-Za-z\-~]+)*)"
    r"|(?:-?(?P<pre_alpha>[A-Za-z\-~]+[0-9A-Za-z\-~]*(?:\.[0-9A-Za-z\-~]+)*)))?"
    r"(?:\+(?P<meta>[0-9A-Za-z\-~]+(?:\.[0-9A-Za-z\-~]+)*))?"
)


@dataclass(frozen=True)
class Version:
    """A pseudo-semantic version padded to at least three numeric segments."""

    parts: tuple[int, ...]
    prerelease: str = ""
    metadata: str = ""
    original: str = ""

    def segments(self) -> list[int]:
        """The numeric segments of the version."""
        return list(self.parts)

    def __str__(self) -> str:
        text = ".".join(str(part) for part in self.parts)
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.metadata:
            text += f"+{self.metadata}"
        return text


def parse_version(text: str) -> Version:
    """Parse a version string; raise ValueError if it is malformed."""
    found = _VERSION_RE.fullmatch(text)
    if found is None:
        raise ValueError(f"malformed version: {text}")
    parts = []
    for piece in found["numbers"].split("."):
        number = int(piece)
        if number > _MAX_SEGMENT:
            raise ValueError(f"error parsing version: {text}")
        parts.append(number)
    parts.extend([0] * (3 - len(parts)))
    prerelease = found["pre_alpha"] or found["pre_num"] or ""
    return Version(tuple(parts), prerelease, found["meta"] or "", text)


def destructure_cpe(cpe: str) -> tuple[str, str]:
    """Split a CPE name into its short form (up to the product) and its version."""
    parts = cpe.split(":")
    if len(parts) < 5:
        log.debug("CPE string '%s' is too short", cpe)
        return "", ""
    split_index = 5 if parts[1] == "2.3" else 4
    if split_index >= len(parts):
        raise ValueError(f"CPE string '{cpe}' has no version component")
    return ":".join(parts[:split_index]), parts[split_index]


def type_from_release(release: Release) -> DistroType | None:
    """Find the distribution type from the release ID, ID_LIKE, then name."""
    if release.id in ID_MAPPING:
        return ID_MAPPING[release.id]
    for like in release.id_like:
        if like in ID_MAPPING:
            return ID_MAPPING[like]
    return ID_MAPPING.get(release.name)


@dataclass(frozen=True)
class Distro:
    """A Linux distribution with its version and CPE name."""

    distro_type: DistroType
    version: Version | None
    raw_version: str
    id_like: tuple[str, ...]
    cpe_name: str

    def name(self) -> str:
        return self.distro_type.value

    def major_version(self) -> str:
        """The major version of the distribution."""
        if self.version is None:
            return self.raw_version.split(".")[0]
        return str(self.version.segments()[0])

    def full_version(self) -> str:
        """The version exactly as the release gave it."""
        return self.raw_version

    def is_rolling(self) -> bool:
        return self.distro_type in _ROLLING

    def __str__(self) -> str:
        return f"{self.distro_type.value} {self.raw_version or '(version unknown)'}"


def new_distro(distro_type: DistroType, cpe_name: str, version: str, *id_likes: str) -> Distro:
    """Create a Distro, synthesising a CPE name when none is given."""
    parsed = None
    if version:
        try:
            parsed = parse_version(version)
        except ValueError as exc:
            raise ValueError(f"unable to parse version: {exc}") from exc
        if not cpe_name:
            cpe_name = f"cpe:2.3:o:{distro_type.cpe_vendor()}:{distro_type.cpe_product()}:{version}"
    return Distro(distro_type, parsed, version, tuple(id_likes), cpe_name)


def distro_from_release(release: Release) -> Distro:
    """Create a Distro from raw release information."""
    distro_type = type_from_release(release)
    if distro_type is None:
        raise ValueError("unable to determine distro type")

    selected = ""
    for candidate in (release.version_id, release.version):
        if not candidate:
            continue
        try:
            parse_version(candidate)
        except ValueError:
            continue
        selected = candidate
        break

    return new_distro(distro_type, release.cpe_name, selected, *release.id_like)