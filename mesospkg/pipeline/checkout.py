"""Check out the requested Mesos revision and resolve its version."""

import logging

from mesospkg.models import BuildRequest
from mesospkg.utils.parsers.url import resolve_repo
from mesospkg.utils.parsers.version import read_configure_version
from mesospkg.utils.tools import ToolRunner

logger = logging.getLogger(__name__)


def checkout(request: BuildRequest, runner: ToolRunner) -> None:
    """Clone the repository into the source dir unless it already exists.

    An existing source dir is trusted as-is.
    """
    url, ref = resolve_repo(request.repo, request.ref)

    if request.src_dir.is_dir():
        logger.info("Found directory %s; skipping checkout.", request.src_dir)
        return

    logger.info("Cloning: %s at %s", url, ref or "default branch")
    runner.run(["git", "clone", url, str(request.src_dir)])
    if ref:
        runner.run(["git", "checkout", "-f", ref], cwd=request.src_dir)


def resolve_version(request: BuildRequest) -> str:
    """Return the nominal version override, or the one in configure.ac."""
    if request.nominal_version:
        logger.info("Using nominal version %s", request.nominal_version)
        return request.nominal_version
    version = read_configure_version(request.src_dir)
    logger.info("Mesos version from configure.ac: %s", version)
    return version


def source_revision(request: BuildRequest, runner: ToolRunner) -> str:
    """Return the abbreviated commit hash of the checkout."""
    return runner.capture(["git", "log", "-n1", "--format=%h"], cwd=request.src_dir)
