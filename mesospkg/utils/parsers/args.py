"""Argument Parser for the mesospkg pipeline."""

import argparse
import os
import shlex
import time
from collections.abc import Sequence
from pathlib import Path

from mesospkg.models import BuildRequest

DEFAULT_REPO = "https://gitbox.apache.org/repos/asf/mesos.git"
DEFAULT_SRC_DIR = Path("mesos-repo")


def default_build_version() -> str:
    """Return $BUILD_VERSION, or a 0.1.<UTC timestamp> iteration."""
    return os.environ.get("BUILD_VERSION") or time.strftime("0.1.%Y%m%d%H%M%S", time.gmtime())


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Build Mesos from source and package it as a deb or rpm.",
    )

    parser.add_argument(
        "--repo",
        default=DEFAULT_REPO,
        help="Git URL to build from; select a ref with ?tag=, ?branch= or ?ref=.",
    )
    parser.add_argument(
        "--src-dir",
        type=Path,
        default=DEFAULT_SRC_DIR,
        help="Directory to check the source out into.",
    )
    parser.add_argument(
        "--build-dir",
        type=Path,
        help="Directory to build in (default: <src-dir>/build).",
    )
    parser.add_argument(
        "--prebuilt",
        action="store_true",
        help="Skip checkout and build; package an existing build.",
    )
    parser.add_argument(
        "--rename",
        action="store_true",
        help="Name the package after its name, version, iteration and arch.",
    )
    parser.add_argument(
        "--branch",
        help="Git ref to check out, overriding any ref in --repo.",
    )
    parser.add_argument(
        "--nominal-version",
        help="Package version to use instead of the one in configure.ac.",
    )
    parser.add_argument(
        "--build-version",
        default=default_build_version(),
        help="Package iteration/release (default: $BUILD_VERSION or 0.1.<timestamp>).",
    )
    parser.add_argument(
        "--extra-libs",
        default="",
        help="Semicolon-separated library paths to ship in /usr/lib.",
    )
    parser.add_argument(
        "--configure-flags",
        default="",
        help="Extra flags passed to configure.",
    )
    parser.add_argument(
        "--git-version",
        action="store_true",
        help="Append the short commit hash of the checkout to the version.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(),
        help="Directory to write the package into.",
    )
    parser.add_argument(
        "--verbosity",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default="INFO",
        help="Set logging level.",
    )

    return parser.parse_args(argv)


def build_request(args: argparse.Namespace) -> BuildRequest:
    """Fold parsed arguments and environment defaults into a BuildRequest."""
    return BuildRequest(
        repo=args.repo,
        src_dir=args.src_dir,
        build_dir=args.build_dir or args.src_dir / "build",
        build_version=args.build_version,
        ref=args.branch,
        nominal_version=args.nominal_version,
        configure_flags=tuple(shlex.split(args.configure_flags)),
        extra_libs=tuple(Path(lib) for lib in args.extra_libs.split(";") if lib),
        prebuilt=args.prebuilt,
        rename=args.rename,
        append_revision=args.git_version,
        output_dir=args.output_dir,
        vendor=os.environ.get("MESOS_VENDOR", ""),
    )
