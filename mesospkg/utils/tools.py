"""Run the external tools (git, autotools, make, fpm) the pipeline drives."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class ToolRunner(Protocol):
    """Interface every pipeline stage uses to invoke external commands."""

    def run(self, argv: Sequence[str], cwd: Path | None = None) -> None:
        """Run argv to completion, raising if it exits non-zero."""

    def capture(self, argv: Sequence[str], cwd: Path | None = None) -> str:
        """Run argv and return its stripped standard output."""


class SubprocessRunner:
    """ToolRunner backed by subprocess, failing on the first non-zero exit."""

    def run(self, argv: Sequence[str], cwd: Path | None = None) -> None:
        """Log and run argv, raising CalledProcessError on failure."""
        logger.info("In %s, running %s", cwd or Path.cwd(), " ".join(argv))
        subprocess.run(list(argv), cwd=cwd, check=True)

    def capture(self, argv: Sequence[str], cwd: Path | None = None) -> str:
        """Run argv and return its stripped stdout."""
        logger.debug("In %s, capturing %s", cwd or Path.cwd(), " ".join(argv))
        result = subprocess.run(
            list(argv),
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
        return result.stdout.strip()
