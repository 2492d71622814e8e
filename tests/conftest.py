"""Shared fixtures: a recording tool runner and a fake Mesos checkout."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from mesospkg.models import BuildRequest, OsTag, Platform


class FakeRunner:
    """Records commands instead of running them.

    ``effects`` maps a command name to a callable invoked with (argv, cwd),
    ``outputs`` maps a full argv tuple to the text ``capture`` returns.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path | None]] = []
        self.effects: dict[str, Callable[[list[str], Path | None], None]] = {}
        self.outputs: dict[tuple[str, ...], str] = {}

    def run(self, argv: Sequence[str], cwd: Path | None = None) -> None:
        argv = list(argv)
        self.calls.append((argv, cwd))
        if effect := self.effects.get(Path(argv[0]).name):
            effect(argv, cwd)

    def capture(self, argv: Sequence[str], cwd: Path | None = None) -> str:
        self.calls.append((list(argv), cwd))
        return self.outputs[tuple(argv)]

    @property
    def commands(self) -> list[list[str]]:
        return [argv for argv, _ in self.calls]


def fake_make(argv: list[str], cwd: Path | None) -> None:
    """Pretend `make install DESTDIR=...` installed the Mesos libraries."""
    if "install" not in argv:
        return
    destdir = Path(next(arg for arg in argv if arg.startswith("DESTDIR=")).split("=", 1)[1])
    lib_dir = destdir / "usr/lib"
    lib_dir.mkdir(parents=True, exist_ok=True)
    (lib_dir / "libmesos-1.7.3.so").write_text("")
    (lib_dir / "libmesos.so").write_text("")
    (destdir / "usr/sbin").mkdir(parents=True, exist_ok=True)
    (destdir / "usr/sbin/mesos-master").write_text("")


@pytest.fixture
def runner() -> FakeRunner:
    fake = FakeRunner()
    fake.effects["make"] = fake_make
    return fake


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    """A checkout of Mesos 1.7.3 with a configured build dir."""
    src = tmp_path / "mesos-repo"
    src.mkdir()
    (src / "configure.ac").write_text(
        "AC_PREREQ([2.61])\nAC_INIT([mesos], [1.7.3])\nAC_CONFIG_MACRO_DIR([m4])\n",
    )
    (src / "CHANGELOG").write_text("Release Notes - Mesos - Version 1.7.3\n")
    (src / "build").mkdir()
    return src


@pytest.fixture
def request_for(src_dir: Path, tmp_path: Path) -> Callable[..., BuildRequest]:
    """Build a BuildRequest against the fake checkout, overriding fields."""

    def make(**overrides: object) -> BuildRequest:
        fields = {
            "repo": "https://gitbox.apache.org/repos/asf/mesos.git?tag=1.7.3",
            "src_dir": src_dir,
            "build_dir": src_dir / "build",
            "build_version": "42",
            "output_dir": tmp_path / "out",
        }
        fields.update(overrides)
        return BuildRequest(**fields)

    return make


@pytest.fixture
def centos8() -> Platform:
    return Platform(os_tag=OsTag("centos", "8"), arch="x86_64")


@pytest.fixture
def ubuntu18() -> Platform:
    return Platform(os_tag=OsTag("ubuntu", "18"), arch="amd64")
