"""Assemble package metadata and hand the staging root to fpm."""

import getpass
import logging
import socket
from pathlib import Path

from mesospkg.models import BuildRequest, Family, PackageSpec, Platform
from mesospkg.pipeline.stage import ASSETS
from mesospkg.utils.parsers.platform_tables import dependencies, os_code, package_family
from mesospkg.utils.tools import ToolRunner

logger = logging.getLogger(__name__)

NAME = "mesos"
URL = "https://mesos.apache.org/"
CATEGORY = "misc"
DESCRIPTION = """Cluster resource manager with efficient resource isolation
Apache Mesos is a cluster manager that offers efficient resource isolation
and sharing across distributed frameworks. It can run Hadoop, MPI, Hypertable,
Spark (a new framework for low-latency interactive and iterative jobs), and
other applications."""


def package_version(version: str, revision: str | None = None) -> str:
    """Return the package version, with the source revision appended if given."""
    if revision:
        return f"{version}+git{revision}"
    return version


def package_filename(package_type: str, version: str, iteration: str, arch: str) -> str:
    """Return the conventional file name for a deb or rpm.

    Examples:
        mesos_1.7.3-0.1.ubuntu18_amd64.deb
        mesos-1.7.3-0.1.el8.x86_64.rpm

    """
    if package_type == "deb":
        return f"{NAME}_{version}-{iteration}_{arch}.deb"
    return f"{NAME}-{version}-{iteration}.{arch}.rpm"


def package_spec(
    request: BuildRequest,
    platform: Platform,
    version: str,
    staging: Path,
    revision: str | None = None,
) -> PackageSpec:
    """Build the PackageSpec for the detected platform.

    Raises:
        UnsupportedPlatformError: If the OS is neither Debian- nor RedHat-family

    """
    family = package_family(platform.os_tag)
    package_type = family.value
    iteration = f"{request.build_version}.{os_code(platform.os_tag)}"
    full_version = package_version(version, revision)

    if request.rename:
        filename = package_filename(package_type, full_version, iteration, platform.arch)
    else:
        filename = f"pkg.{package_type}"

    hooks = ASSETS / "hooks" / ("deb" if family is Family.DEBIAN else "rpm")
    return PackageSpec(
        package_type=package_type,
        name=NAME,
        version=full_version,
        iteration=iteration,
        arch=platform.arch,
        output=request.output_dir.resolve() / filename,
        source=staging,
        dependencies=dependencies(platform.os_tag),
        after_install=hooks / "mesos.postinst",
        after_remove=hooks / "mesos.postrm",
        vendor=request.vendor,
        maintainer=f"{getpass.getuser()}@{socket.gethostname()}",
    )


def fpm_command(spec: PackageSpec) -> list[str]:
    """Translate a PackageSpec into an fpm argv."""
    command = [
        "fpm",
        "-s", "dir",
        "-t", spec.package_type,
        "-n", spec.name,
        "-v", spec.version,
        "--iteration", spec.iteration,
        "-a", spec.arch,
        "--description", DESCRIPTION,
        "--url", URL,
        "--category", CATEGORY,
        "--vendor", spec.vendor,
        "-m", spec.maintainer,
        "--config-files", "etc/",
        "--prefix", "/",
    ]  # fmt: skip

    for requirement in spec.dependencies:
        command.extend(["-d", requirement])

    if spec.after_install:
        command.extend(["--after-install", str(spec.after_install)])
    if spec.after_remove:
        command.extend(["--after-remove", str(spec.after_remove)])

    command.extend(["-p", str(spec.output), "-C", str(spec.source), "."])
    return command


def emit(spec: PackageSpec, runner: ToolRunner) -> Path:
    """Replace any previous package at the output path and run fpm."""
    spec.output.parent.mkdir(parents=True, exist_ok=True)
    if spec.output.exists():
        logger.info("Removing existing package %s", spec.output)
        spec.output.unlink()

    logger.info(
        "Packaging %s %s-%s (%s) as %s",
        spec.name,
        spec.version,
        spec.iteration,
        spec.arch,
        spec.output.name,
    )
    runner.run(fpm_command(spec))
    return spec.output
