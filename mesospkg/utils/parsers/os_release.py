"""Detect the host OS and architecture the package is built for."""

import logging
import os
import platform
import shutil
from pathlib import Path

import distro

from mesospkg.exceptions import DetectionError
from mesospkg.models import Family, OsTag, Platform
from mesospkg.utils.parsers.platform_tables import package_arch
from mesospkg.utils.tools import ToolRunner

logger = logging.getLogger(__name__)

OS_RELEASE = Path("/etc/os-release")
REDHAT_RELEASE = Path("/etc/redhat-release")

# Distro names as they appear in release files, mapped to tag names.
DISTRO_ALIASES = {
    "rhel": "redhat",
    "red": "redhat",
    "opensuse-leap": "opensuse",
    "opensuse-tumbleweed": "opensuse",
    "mac": "macosx",
    "macos": "macosx",
}

MAJOR_ONLY_FAMILIES = (Family.DEBIAN, Family.REDHAT)


def normalize_distro(name: str) -> str:
    """Lowercase a distro name and map it onto its canonical tag name."""
    name = name.strip().lower()
    if name in DISTRO_ALIASES:
        return DISTRO_ALIASES[name]
    first_word = name.split()[0] if name else name
    return DISTRO_ALIASES.get(first_word, first_word)


def display_version(name: str, version: str) -> OsTag:
    """Build a normalized OS tag from a raw distro name and version.

    Debian- and RedHat-family distros keep only the major version, macOS
    keeps major.minor, anything else keeps the version as given.

    Example:
        >>> str(display_version("CentOS", "8.3"))
        'centos/8'

    """
    os_tag = OsTag(distro=normalize_distro(name), version=version.strip().lower())
    if os_tag.family in MAJOR_ONLY_FAMILIES:
        return OsTag(os_tag.distro, os_tag.version.split(".")[0])
    if os_tag.family is Family.MACOS:
        return OsTag(os_tag.distro, ".".join(os_tag.version.split(".")[:2]))
    return os_tag


def _from_os_release(path: Path) -> OsTag | None:
    logger.debug("Trying %s...", path)
    if not path.is_file():
        return None
    info = distro.LinuxDistribution(
        include_lsb=False,
        include_uname=False,
        os_release_file=str(path),
        distro_release_file=os.devnull,
    )
    distro_id = info.os_release_attr("id")
    version_id = info.os_release_attr("version_id")
    if not distro_id or not version_id:
        logger.debug("%s has no ID/VERSION_ID", path)
        return None
    return display_version(distro_id, version_id)


def _from_redhat_release(path: Path) -> OsTag | None:
    # Formatted as: <distro> release <version> (<remark>)
    logger.debug("Trying %s...", path)
    if not path.is_file():
        return None
    info = distro.LinuxDistribution(
        include_lsb=False,
        include_uname=False,
        os_release_file=os.devnull,
        distro_release_file=str(path),
    )
    name = info.distro_release_attr("name")
    version = info.distro_release_attr("version_id")
    if not name or not version:
        msg = f"{path} not like: <distro> release <version> (<remark>)"
        raise DetectionError(msg)
    return display_version(name, version)


def _from_sw_vers(runner: ToolRunner) -> OsTag | None:
    logger.debug("Trying sw_vers...")
    if shutil.which("sw_vers") is None:
        return None
    product = runner.capture(["sw_vers", "-productName"])
    if normalize_distro(product) != "macosx":
        msg = f"Expecting productName to be 'Mac OS X' or 'macOS', not {product!r}"
        raise DetectionError(msg)
    return display_version("macosx", runner.capture(["sw_vers", "-productVersion"]))


def detect_os(
    runner: ToolRunner,
    os_release: Path = OS_RELEASE,
    redhat_release: Path = REDHAT_RELEASE,
) -> OsTag:
    """Detect the host OS from the first release descriptor that works.

    Args:
        runner: Tool runner used for the sw_vers fallback
        os_release: Path to the os-release file
        redhat_release: Path to the legacy redhat-release file

    Raises:
        DetectionError: If no strategy identifies the OS

    """
    os_tag = (
        _from_os_release(os_release)
        or _from_redhat_release(redhat_release)
        or _from_sw_vers(runner)
    )
    if os_tag is None:
        msg = "Could not determine OS version!"
        raise DetectionError(msg)

    logger.info("Detected OS: %s", os_tag)
    return os_tag


def detect_platform(
    runner: ToolRunner,
    os_release: Path = OS_RELEASE,
    redhat_release: Path = REDHAT_RELEASE,
    machine: str | None = None,
) -> Platform:
    """Detect the OS tag and the architecture name packages should carry."""
    os_tag = detect_os(runner, os_release, redhat_release)
    arch = package_arch(os_tag.family, machine or platform.machine())
    if not arch:
        msg = "Could not determine machine architecture"
        raise DetectionError(msg)
    logger.info("Detected architecture: %s", arch)
    return Platform(os_tag=os_tag, arch=arch)
