"""Run the mesospkg pipeline inside the packaging container."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import docker

from mesospkg.utils.container.base import DEFAULT_TAG, PackagingContainer
from mesospkg.utils.container.runtime import get_container_runtime_socket

logger = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build the packaging image and run the pipeline in it.",
    )
    parser.add_argument(
        "--socket",
        help="Container runtime socket URL (default: $DOCKER_HOST or a well-known socket).",
    )
    parser.add_argument(
        "--dockerfile-dir",
        type=Path,
        default=Path(),
        help="Directory holding the Dockerfile; also mounted as the workspace.",
    )
    parser.add_argument(
        "--tag",
        default=DEFAULT_TAG,
        help="Tag for the packaging image.",
    )
    parser.add_argument(
        "--verbosity",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Set logging level.",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run in the container instead of the image default.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Build the packaging image and exit with the status of the run."""
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.verbosity))

    # If socket is not provided, try to find one
    socket = args.socket or get_container_runtime_socket()
    logger.info("Using container runtime socket: %s", socket)

    client = docker.DockerClient(base_url=socket)
    container = PackagingContainer(client, tag=args.tag)
    if container.runtime.is_available:
        logger.debug("Found container runtime binary: %s", container.runtime.path)
    else:
        logger.debug("No docker/podman binary on PATH; using the socket only")

    try:
        container.build_image(args.dockerfile_dir)
        status = container.run(args.dockerfile_dir, args.command)
    except docker.errors.DockerException:
        logger.exception("Container run failed")
        sys.exit(1)

    sys.exit(status)


if __name__ == "__main__":
    main()
