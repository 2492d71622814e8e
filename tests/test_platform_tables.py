import pytest

from mesospkg.exceptions import UnsupportedPlatformError
from mesospkg.models import Family, InitSystem, OsTag
from mesospkg.utils.parsers.platform_tables import (
    dependencies,
    init_system,
    os_code,
    package_arch,
    package_family,
)


@pytest.mark.parametrize(
    ("tag", "want"),
    [
        ("debian/10", Family.DEBIAN),
        ("ubuntu/18", Family.DEBIAN),
        ("centos/8", Family.REDHAT),
        ("redhat/7", Family.REDHAT),
        ("opensuse/15", Family.REDHAT),
        ("fedora/34", Family.REDHAT),
    ],
)
def test_package_family(tag, want):
    assert package_family(OsTag.parse(tag)) is want


@pytest.mark.parametrize("tag", ["gentoo/2", "macosx/10.14", "arch/"])
def test_package_family_unsupported(tag):
    with pytest.raises(UnsupportedPlatformError, match=tag):
        package_family(OsTag.parse(tag))


def test_unknown_distro_has_explicit_unsupported_family():
    assert OsTag.parse("gentoo/2").family is Family.UNSUPPORTED


@pytest.mark.parametrize(
    ("tag", "want"),
    [
        ("debian/7", InitSystem.SYSVINIT),
        ("debian/10", InitSystem.SYSTEMD),
        ("ubuntu/14", InitSystem.UPSTART),
        ("ubuntu/16", InitSystem.SYSTEMD),
        ("ubuntu/20", InitSystem.SYSTEMD),
        ("centos/6", InitSystem.UPSTART),
        ("centos/7", InitSystem.SYSTEMD),
        ("redhat/8", InitSystem.SYSTEMD),
        ("opensuse/15", InitSystem.SYSTEMD),
    ],
)
def test_init_system(tag, want):
    assert init_system(OsTag.parse(tag)) is want


@pytest.mark.parametrize("tag", ["gentoo/2", "centos/5", "macosx/10.14"])
def test_init_system_unsupported(tag):
    with pytest.raises(UnsupportedPlatformError, match="init scripts"):
        init_system(OsTag.parse(tag))


def test_dependencies_libcurl_variant():
    assert "libcurl4" in dependencies(OsTag.parse("ubuntu/18"))
    assert "libcurl3" not in dependencies(OsTag.parse("ubuntu/18"))
    assert "libcurl3" in dependencies(OsTag.parse("ubuntu/16"))
    assert "libcurl3" in dependencies(OsTag.parse("debian/9"))
    assert "libcurl4" in dependencies(OsTag.parse("debian/10"))


def test_dependencies_rpm():
    assert dependencies(OsTag.parse("centos/8")) == [
        "libcurl",
        "apr-util",
        "subversion",
        "cyrus-sasl-md5",
        "libevent-devel",
    ]


def test_dependencies_is_pure():
    tag = OsTag.parse("ubuntu/18")
    first = dependencies(tag)
    first.append("mutated")
    assert dependencies(tag) == [
        "java-runtime-headless",
        "libcurl4",
        "libevent-dev",
        "libsvn1",
        "libsasl2-modules",
    ]


@pytest.mark.parametrize(
    ("tag", "want"),
    [
        ("centos/8", "el8"),
        ("redhat/7", "el7"),
        ("fedora/34", "fc34"),
        ("opensuse/15", "suse15"),
        ("ubuntu/18", "ubuntu18"),
        ("debian/10", "debian10"),
    ],
)
def test_os_code(tag, want):
    assert os_code(OsTag.parse(tag)) == want


@pytest.mark.parametrize(
    ("family", "machine", "want"),
    [
        (Family.DEBIAN, "x86_64", "amd64"),
        (Family.DEBIAN, "aarch64", "arm64"),
        (Family.DEBIAN, "ppc64le", "ppc64el"),
        (Family.DEBIAN, "i686", "i386"),
        (Family.REDHAT, "x86_64", "x86_64"),
        (Family.REDHAT, "aarch64", "aarch64"),
    ],
)
def test_package_arch(family, machine, want):
    assert package_arch(family, machine) == want
