"""Drive the upstream autotools build of a Mesos checkout."""

import logging

from mesospkg.models import BuildRequest
from mesospkg.utils.parsers.version import version_at_least
from mesospkg.utils.tools import ToolRunner

logger = logging.getLogger(__name__)

PREFIX_FLAG = "--prefix=/usr"
# Only this pre-release needs C++11 support turned off.
LEGACY_CXX11_VERSION = "0.18.0-rc4"
LEGACY_CXX11_FLAG = "--without-cxx11"
OPTIMIZE_SINCE = "0.19.0"
OPTIMIZE_FLAG = "--enable-optimize"
# Keeps configure from installing Python packages over the system ones.
NO_DEPENDENCY_INSTALL_FLAG = "--disable-python-dependency-install"


def configure_flags(version: str, extra_flags: tuple[str, ...] = ()) -> list[str]:
    """Assemble the flags passed to configure for a given Mesos version."""
    flags = [PREFIX_FLAG]
    if version == LEGACY_CXX11_VERSION:
        flags.append(LEGACY_CXX11_FLAG)
    if version_at_least(version, OPTIMIZE_SINCE):
        flags.append(OPTIMIZE_FLAG)
    flags.extend(extra_flags)
    flags.append(NO_DEPENDENCY_INSTALL_FLAG)
    return flags


def build(request: BuildRequest, version: str, runner: ToolRunner) -> None:
    """Regenerate the build scripts, configure and make."""
    src_dir = request.src_dir.resolve()
    runner.run(["autoreconf", "-f", "-i", "-Wall,no-obsolete"], cwd=src_dir)
    if (src_dir / "bootstrap").is_file():
        runner.run(["./bootstrap"], cwd=src_dir)

    request.build_dir.mkdir(parents=True, exist_ok=True)
    flags = configure_flags(version, request.configure_flags)
    logger.info("Configuring Mesos %s with: %s", version, " ".join(flags))
    runner.run([str(src_dir / "configure"), *flags], cwd=request.build_dir)
    runner.run(["make"], cwd=request.build_dir)
