"""Version parsing and comparison for Mesos release strings."""

import logging
import re
from pathlib import Path

from mesospkg.exceptions import DetectionError, InvalidVersionError
from mesospkg.models import Ordering

logger = logging.getLogger(__name__)

AC_INIT_PATTERN = re.compile(r"AC_INIT\(\s*\[?mesos\]?\s*,\s*\[?([^\],)\s]+)\]?")


def parse_version(version: str) -> tuple[int, ...]:
    """Parse a dotted version into a tuple of integers.

    Anything after the first "-" or "+" (e.g. "-rc4", "+dfsg1") is ignored, so only the
    numeric release takes part in ordering.

    Args:
        version: Version string such as "1.7.3" or "0.18.0-rc4"

    Raises:
        InvalidVersionError: If a segment is not a non-negative integer

    """
    release = re.split(r"[-+]", version.strip(), maxsplit=1)[0]
    segments = release.split(".")
    if not all(segment.isdigit() for segment in segments):
        msg = f"Not a numeric version: {version!r}"
        raise InvalidVersionError(msg)
    return tuple(int(segment) for segment in segments)


def compare_versions(left: str, right: str) -> Ordering:
    """Compare two versions numerically, segment by segment.

    The shorter version is padded with zeros on the right, so "0.19"
    compares equal to "0.19.0".
    """
    lhs = parse_version(left)
    rhs = parse_version(right)
    width = max(len(lhs), len(rhs))
    lhs += (0,) * (width - len(lhs))
    rhs += (0,) * (width - len(rhs))

    for a, b in zip(lhs, rhs, strict=True):
        if a > b:
            return Ordering.GREATER
        if a < b:
            return Ordering.LESS
    return Ordering.EQUAL


def version_at_least(version: str, threshold: str) -> bool:
    """Return True if version is equal to or newer than threshold."""
    return compare_versions(version, threshold) is not Ordering.LESS


def read_configure_version(src_dir: Path) -> str:
    """Read the Mesos version declared by AC_INIT in configure.ac.

    Args:
        src_dir: Root of the Mesos checkout

    Raises:
        DetectionError: If configure.ac is missing or has no AC_INIT

    """
    configure_ac = src_dir / "configure.ac"
    try:
        content = configure_ac.read_text()
    except FileNotFoundError as e:
        msg = f"Cannot determine Mesos version: {configure_ac} not found"
        raise DetectionError(msg) from e

    if match := AC_INIT_PATTERN.search(content):
        version = match.group(1)
        logger.debug("Found version %s in %s", version, configure_ac)
        return version

    msg = f"Cannot determine Mesos version: no AC_INIT in {configure_ac}"
    raise DetectionError(msg)
