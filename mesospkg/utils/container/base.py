"""Build the packaging image and run the pipeline inside it."""

import logging
from collections.abc import Sequence
from pathlib import Path

import docker
import docker.errors

from mesospkg.utils.container.runtime import detect_container_runtime

logger = logging.getLogger(__name__)

DEFAULT_TAG = "mesos-deb-packaging"
WORKDIR = "/mesos-deb-packaging"


class Runtime:
    """Handles container runtime specific operations."""

    def __init__(self, runtime_path: str | None) -> None:
        """Initialize the runtime with a path.

        Args:
            runtime_path: Path to the container runtime binary

        """
        self._runtime_path = runtime_path

    @property
    def is_available(self) -> bool:
        """Check if this container runtime binary is installed."""
        return self._runtime_path is not None

    @property
    def path(self) -> str | None:
        """Path to the runtime binary, if one was found."""
        return self._runtime_path


class PackagingContainer:
    """Runs the packaging pipeline in a container built from a Dockerfile."""

    def __init__(self, client: docker.DockerClient, tag: str = DEFAULT_TAG) -> None:
        """Initialize with a docker client.

        Args:
            client: Docker client connected to the runtime socket
            tag: Tag given to the built image

        """
        self.client = client
        self.tag = tag
        self._runtime = Runtime(detect_container_runtime())

    @property
    def runtime(self) -> Runtime:
        """The docker or podman binary found on PATH."""
        return self._runtime

    def build_image(self, context: Path) -> None:
        """Build the packaging image from the Dockerfile in context."""
        logger.info("Building image %s from %s", self.tag, context)
        try:
            _, build_log = self.client.images.build(path=str(context), tag=self.tag, rm=True)
        except docker.errors.BuildError:
            logger.exception("Error building image %s", self.tag)
            raise
        for chunk in build_log:
            if line := chunk.get("stream", "").strip():
                logger.debug(line)

    def run(self, workspace: Path, command: Sequence[str] | None = None) -> int:
        """Run the image with workspace mounted, returning the exit status.

        Args:
            workspace: Host directory mounted at the image's working directory
            command: Command overriding the image's CMD

        """
        volumes = {str(workspace.resolve()): {"bind": WORKDIR, "mode": "rw"}}
        logger.info("Running %s with %s mounted at %s", self.tag, workspace, WORKDIR)
        try:
            container = self.client.containers.run(
                image=self.tag,
                command=list(command) if command else None,
                volumes=volumes,
                working_dir=WORKDIR,
                detach=True,
            )
        except docker.errors.APIError:
            logger.exception("Error starting container from %s", self.tag)
            raise

        try:
            for line in container.logs(stream=True, follow=True):
                print(line.decode("utf-8"), end="")
            status = container.wait()["StatusCode"]
        finally:
            container.remove()

        logger.info("Container exited with status %d", status)
        return status
