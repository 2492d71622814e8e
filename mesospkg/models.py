"""Dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class Ordering(Enum):
    """Result of comparing two versions."""

    LESS = "<"
    EQUAL = "="
    GREATER = ">"


class Family(Enum):
    """Packaging family an OS belongs to."""

    DEBIAN = "deb"
    REDHAT = "rpm"
    MACOS = "osxpkg"
    UNSUPPORTED = "unsupported"


class InitSystem(Enum):
    """Init-script flavour installed into the staging root."""

    SYSTEMD = "systemd"
    SYSVINIT = "init.d"
    UPSTART = "upstart"


DEBIAN_DISTROS = frozenset({"debian", "ubuntu"})
REDHAT_DISTROS = frozenset(
    {"centos", "redhat", "rocky", "almalinux", "fedora", "amzn", "opensuse", "sles"},
)


@dataclass(frozen=True)
class RepoLocation:
    """A repository URL split into its parts."""

    base: str  # URL without query or fragment
    query: str  # Text after the first '?', empty if none
    fragment: str  # Text after the first '#', empty if none


@dataclass(frozen=True)
class OsTag:
    """Normalized distro/version pair, rendered as ``<distro>/<version>``."""

    distro: str
    version: str

    def __str__(self) -> str:
        """Render as "distro/version"."""
        return f"{self.distro}/{self.version}"

    @classmethod
    def parse(cls, tag: str) -> "OsTag":
        """Build an OsTag from its ``<distro>/<version>`` form."""
        distro, _, version = tag.partition("/")
        return cls(distro=distro, version=version)

    @property
    def family(self) -> Family:
        """Package family for this distro."""
        if self.distro in DEBIAN_DISTROS:
            return Family.DEBIAN
        if self.distro in REDHAT_DISTROS:
            return Family.REDHAT
        if self.distro == "macosx":
            return Family.MACOS
        return Family.UNSUPPORTED

    @property
    def major(self) -> int:
        """Major version as an integer, 0 when it is not numeric."""
        head = self.version.split(".")[0]
        return int(head) if head.isdigit() else 0


@dataclass(frozen=True)
class Platform:
    """The detected host: OS tag plus the packaging system's arch name."""

    os_tag: OsTag
    arch: str


@dataclass(frozen=True)
class BuildRequest:
    """Parameters of one packaging run, fixed once parsed from the CLI."""

    repo: str
    src_dir: Path
    build_dir: Path
    build_version: str
    ref: str | None = None
    nominal_version: str | None = None
    configure_flags: tuple[str, ...] = ()
    extra_libs: tuple[Path, ...] = ()
    prebuilt: bool = False
    rename: bool = False
    append_revision: bool = False
    output_dir: Path = Path()
    vendor: str = ""

    @property
    def staging_dir(self) -> Path:
        """Fake root that `make install` writes into."""
        return self.src_dir / "toor"

    @property
    def java_enabled(self) -> bool:
        """False when the configure flags disable Java."""
        return "--disable-java" not in self.configure_flags


@dataclass
class PackageSpec:
    """Everything fpm needs to turn the staging root into a package."""

    package_type: str  # "deb" or "rpm"
    name: str
    version: str
    iteration: str
    arch: str
    output: Path
    source: Path  # Staging root handed to fpm as the package tree
    dependencies: list[str] = field(default_factory=list)
    after_install: Path | None = None
    after_remove: Path | None = None
    vendor: str = ""
    maintainer: str = ""
