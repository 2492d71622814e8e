"""Lookup tables keyed by OS tag: init systems, dependencies, OS codes."""

from mesospkg.exceptions import UnsupportedPlatformError
from mesospkg.models import Family, InitSystem, OsTag

# Releases that predate systemd, per distro.
LEGACY_INIT_SYSTEMS = {
    OsTag("debian", "7"): InitSystem.SYSVINIT,
    OsTag("ubuntu", "12"): InitSystem.UPSTART,
    OsTag("ubuntu", "14"): InitSystem.UPSTART,
    OsTag("centos", "6"): InitSystem.UPSTART,
    OsTag("redhat", "6"): InitSystem.UPSTART,
    OsTag("amzn", "1"): InitSystem.UPSTART,
}

# First major release of each distro that ships systemd.
SYSTEMD_SINCE = {
    "debian": 8,
    "ubuntu": 15,
    "centos": 7,
    "redhat": 7,
    "rocky": 8,
    "almalinux": 8,
    "fedora": 15,
    "amzn": 2,
    "opensuse": 12,
    "sles": 12,
}

DEB_DEPENDENCIES = (
    "java-runtime-headless",
    "libevent-dev",
    "libsvn1",
    "libsasl2-modules",
)
RPM_DEPENDENCIES = (
    "libcurl",
    "apr-util",
    "subversion",
    "cyrus-sasl-md5",
    "libevent-devel",
)

# libcurl4 replaced libcurl3 in these releases.
LIBCURL4_SINCE = {"ubuntu": 18, "debian": 10}

RPM_OS_CODES = {
    "centos": "el",
    "redhat": "el",
    "rocky": "el",
    "almalinux": "el",
    "fedora": "fc",
    "amzn": "amzn",
    "opensuse": "suse",
    "sles": "suse",
}

DEB_ARCHES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "ppc64le": "ppc64el",
    "s390x": "s390x",
}


def init_system(os_tag: OsTag) -> InitSystem:
    """Pick the init-script family to install for an OS tag.

    Raises:
        UnsupportedPlatformError: If the tag has no table entry

    """
    if os_tag in LEGACY_INIT_SYSTEMS:
        return LEGACY_INIT_SYSTEMS[os_tag]

    since = SYSTEMD_SINCE.get(os_tag.distro)
    if since is not None and os_tag.major >= since:
        return InitSystem.SYSTEMD

    msg = f"Not sure how to make init scripts for: {os_tag}"
    raise UnsupportedPlatformError(msg)


def package_family(os_tag: OsTag) -> Family:
    """Return the packaging family for an OS tag, deb or rpm only.

    Raises:
        UnsupportedPlatformError: If the tag is neither Debian- nor RedHat-family

    """
    family = os_tag.family
    if family in (Family.DEBIAN, Family.REDHAT):
        return family

    msg = f"Not sure how to package for: {os_tag}"
    raise UnsupportedPlatformError(msg)


def dependencies(os_tag: OsTag) -> list[str]:
    """Return the runtime package dependencies for an OS tag."""
    if package_family(os_tag) is Family.REDHAT:
        return list(RPM_DEPENDENCIES)

    libcurl = "libcurl3"
    if os_tag.major >= LIBCURL4_SINCE.get(os_tag.distro, 0):
        libcurl = "libcurl4"
    java, *rest = DEB_DEPENDENCIES
    return [java, libcurl, *rest]


def os_code(os_tag: OsTag) -> str:
    """Return the short OS code used in the iteration and filename.

    Examples: "el8" for centos/8, "ubuntu18" for ubuntu/18.
    """
    if package_family(os_tag) is Family.DEBIAN:
        return f"{os_tag.distro}{os_tag.major}"
    return f"{RPM_OS_CODES[os_tag.distro]}{os_tag.major}"


def package_arch(family: Family, machine: str) -> str:
    """Map a machine name onto the packaging system's architecture name."""
    machine = machine.lower()
    if family is Family.DEBIAN:
        if machine in DEB_ARCHES:
            return DEB_ARCHES[machine]
        if machine.endswith("86"):
            return "i386"
    return machine
