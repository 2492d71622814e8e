"""Detects how to interact with the container runtime (Docker or Podman)."""

import logging
import os
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)


def detect_container_runtime() -> str | None:
    """Detect available container engine (Docker or Podman).

    Returns:
        str: Path to the container runtime binary
        None: If no container runtime is found

    """
    # Check for Docker and Podman
    for runtime in ("docker", "podman"):
        if path := shutil.which(runtime):
            logger.debug("Found container runtime: %s at %s", runtime, path)
            return path

    # No container engine found
    logger.debug("No container runtime found")
    return None


def candidate_sockets() -> list[Path]:
    """Socket paths Docker and Podman listen on, most likely first."""
    candidates = [Path("/var/run/docker.sock")]
    if xdg_runtime := os.environ.get("XDG_RUNTIME_DIR"):
        candidates.append(Path(xdg_runtime) / "podman" / "podman.sock")
    candidates.append(Path("/run/podman/podman.sock"))
    return candidates


def get_container_runtime_socket() -> str:
    """Return a base URL for the docker client.

    $DOCKER_HOST wins; otherwise the first existing well-known socket.

    Raises:
        RuntimeError: If no socket can be found

    """
    if docker_host := os.environ.get("DOCKER_HOST"):
        return docker_host

    for socket in candidate_sockets():
        if socket.exists():
            logger.debug("Found container runtime socket: %s", socket)
            return f"unix://{socket}"

    msg = "No container runtime socket found; pass --socket or set DOCKER_HOST"
    raise RuntimeError(msg)
