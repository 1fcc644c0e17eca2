import pytest

from xeol.distro import (
    Distro,
    DistroType,
    Release,
    destructure_cpe,
    distro_from_release,
    new_distro,
    parse_version,
    type_from_release,
)


@pytest.mark.parametrize(
    "release, expected_type, expected_raw, expected_version",
    [
        (Release(id="centos", version_id="8", version="7"), DistroType.CENTOS, "8", "8.0.0"),
        (Release(name="windows", version_id="8"), DistroType.WINDOWS, "8", "8.0.0"),
        (Release(id="centos", version="8"), DistroType.CENTOS, "8", "8.0.0"),
        (Release(id="centos"), DistroType.CENTOS, "", ""),
    ],
)
def test_distro_from_release(release, expected_type, expected_raw, expected_version):
    d = distro_from_release(release)
    assert d.distro_type == expected_type
    if expected_version:
        assert str(d.version) == expected_version
    else:
        assert d.version is None
    assert d.full_version() == expected_raw


def test_bogus_distro_type_is_error():
    with pytest.raises(ValueError):
        distro_from_release(Release(id="bogosity", version_id="8"))


@pytest.mark.parametrize("version", ["8", "18.04", "0", "18.1.2"])
def test_full_version(version):
    d = distro_from_release(Release(id="centos", version=version))
    assert d.full_version() == version


@pytest.mark.parametrize(
    "version, expected",
    [("8", "8"), ("18.04", "18"), ("0", "0"), ("18.1.2", "18")],
)
def test_major_version(version, expected):
    d = distro_from_release(Release(id="centos", version=version))
    assert d.major_version() == expected


def test_major_version_without_parsed_version():
    d = Distro(DistroType.ARCH_LINUX, None, "2023.01", (), "")
    assert d.major_version() == "2023"


@pytest.mark.parametrize(
    "cpe, short, version",
    [
        ("cpe:/a:apache:struts:2.5.10", "cpe:/a:apache:struts", "2.5.10"),
        ("cpe:2.3:a:apache:struts:2.5.10", "cpe:2.3:a:apache:struts", "2.5.10"),
        ("cpe:/a:apache:struts:2.5:*:*:*:*:*:*:*", "cpe:/a:apache:struts", "2.5"),
        ("cpe:2.3:a:apache:struts:2.5:*:*:*:*:*:*:*", "cpe:2.3:a:apache:struts", "2.5"),
        ("", "", ""),
    ],
)
def test_destructure_cpe(cpe, short, version):
    assert destructure_cpe(cpe) == (short, version)


def test_destructure_cpe_23_without_version_is_error():
    with pytest.raises(ValueError):
        destructure_cpe("cpe:2.3:o:vendor:product")


@pytest.mark.parametrize(
    "release, expected_cpe",
    [
        (Release(id="ubuntu", version_id="20.04"), "cpe:2.3:o:canonical:ubuntu_linux:20.04"),
        (Release(id="debian", version_id="8"), "cpe:2.3:o:debian:debian_linux:8"),
        (Release(id="alpine", version_id="3.11.6"), "cpe:2.3:o:alpinelinux:alpine_linux:3.11.6"),
        (
            Release(id="fedora", version_id="31", cpe_name="cpe:/o:fedoraproject:fedora:31"),
            "cpe:/o:fedoraproject:fedora:31",
        ),
        (Release(id="arch"), ""),
        (Release(id="gentoo"), ""),
    ],
)
def test_cpe_name(release, expected_cpe):
    assert distro_from_release(release).cpe_name == expected_cpe


def test_version_padding():
    assert parse_version("20.04").segments() == [20, 4, 0]
    assert str(parse_version("2")) == "2.0.0"


def test_version_with_prerelease_and_metadata():
    v = parse_version("1.2.3-beta+build.1")
    assert v.prerelease == "beta"
    assert v.metadata == "build.1"
    assert str(v) == "1.2.3-beta+build.1"


@pytest.mark.parametrize("text", ["", "not-a-version", "1..2"])
def test_malformed_version(text):
    with pytest.raises(ValueError):
        parse_version(text)


def test_new_distro_bad_version_is_error():
    with pytest.raises(ValueError, match="unable to parse version"):
        new_distro(DistroType.CENTOS, "", "abc.def")


def test_new_distro_keeps_id_likes():
    d = new_distro(DistroType.REDHAT, "", "8", "fedora", "rhel")
    assert d.id_like == ("fedora", "rhel")
    assert d.name() == "redhat"


def test_type_from_release_fallbacks():
    assert type_from_release(Release(id="custom", id_like=("rhel",))) == DistroType.REDHAT
    assert type_from_release(Release(name="debian")) == DistroType.DEBIAN
    assert type_from_release(Release(id="unknown")) is None


def test_is_rolling():
    assert new_distro(DistroType.WOLFI, "", "").is_rolling()
    assert not new_distro(DistroType.UBUNTU, "", "20.04").is_rolling()


def test_str():
    assert str(new_distro(DistroType.CENTOS, "", "8")) == "centos 8"
    assert str(new_distro(DistroType.CENTOS, "", "")) == "centos (version unknown)"


def test_cpe_mappings():
    assert DistroType.UBUNTU.cpe_vendor() == "canonical"
    assert DistroType.SLES.cpe_product() == "linux_enterprise_server"