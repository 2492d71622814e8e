"""mesospkg - Build Apache Mesos from source and package it with fpm."""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from mesospkg.models import BuildRequest, Platform
from mesospkg.pipeline.build import build
from mesospkg.pipeline.checkout import checkout, resolve_version, source_revision
from mesospkg.pipeline.emit import emit, package_spec
from mesospkg.pipeline.stage import stage
from mesospkg.utils.parsers.args import build_request, parse_args
from mesospkg.utils.parsers.os_release import detect_platform
from mesospkg.utils.parsers.url import resolve_repo
from mesospkg.utils.tools import SubprocessRunner, ToolRunner

logger = logging.getLogger(__name__)


def run_pipeline(
    request: BuildRequest,
    platform: Platform,
    runner: ToolRunner,
) -> Path:
    """Check out, build, stage and package Mesos for the given platform.

    Args:
        request: Parameters of this run
        platform: Detected OS tag and architecture
        runner: Runner for every external command

    Returns:
        Path to the package written by fpm

    """
    # Reject a malformed repository URL even when checkout is skipped.
    resolve_repo(request.repo, request.ref)

    if request.prebuilt:
        logger.info("Prebuilt requested; skipping checkout and build.")
    else:
        checkout(request, runner)

    version = resolve_version(request)

    if not request.prebuilt:
        build(request, version, runner)

    staging = stage(request, version, platform.os_tag, runner)

    revision = source_revision(request, runner) if request.append_revision else None
    spec = package_spec(request, platform, version, staging, revision)
    return emit(spec, runner)


def main(argv: Sequence[str] | None = None) -> None:
    """Run the CLI, printing the package path or exiting 1 on failure."""
    args = parse_args(argv)

    # Set logging level
    log_level = getattr(logging, args.verbosity)
    logging.basicConfig(level=log_level)

    runner = SubprocessRunner()
    try:
        request = build_request(args)
        platform = detect_platform(runner)
        package = run_pipeline(request, platform, runner)
    except Exception:
        logger.exception("Packaging failed")
        sys.exit(1)

    logger.info("Wrote package %s", package)
    print(package)


if __name__ == "__main__":
    main()
